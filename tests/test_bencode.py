import pytest

from voxelhex.bencode import BencodeError, decode, encode


def test_integer_wire_format():
    assert encode(42) == b"i42e"
    assert decode(b"i42e") == 42


def test_string_wire_format():
    assert encode(b"spam") == b"4:spam"
    assert decode(b"4:spam") == b"spam"


def test_list_wire_format():
    assert encode([1, b"a"]) == b"li1e1:ae"


@pytest.mark.parametrize("value", [0, -7, 123456789012345678901234567890, -1])
def test_integer_round_trip(value):
    assert decode(encode(value)) == value


def test_bool_encodes_as_integer():
    assert encode(True) == encode(1)
    assert encode(False) == encode(0)


def test_str_is_utf8():
    text = "héllo #b#"
    assert decode(encode(text)) == text.encode("utf-8")


def test_empty_string_and_list():
    assert decode(encode(b"")) == b""
    assert decode(encode([])) == []


def test_nested_round_trip():
    value = [1, [b"##c##", [2, 3]], {b"key": [b"x", 0]}]
    assert decode(encode(value)) == value


def test_tuple_encodes_like_list():
    assert encode((1, 2, b"z")) == encode([1, 2, b"z"])


def test_dict_keys_are_sorted():
    assert encode({"b": 1, "a": 2}) == encode({"a": 2, "b": 1})
    assert decode(encode({"b": 1, "a": 2})) == {b"a": 2, b"b": 1}


@pytest.mark.parametrize(
    "data",
    [
        b"i-0e",
        b"i03e",
        b"ie",
        b"i12",
        b"i1x2e",
        b"5:ab",
        b"01:a",
        b"3ab",
        b"li1e",
        b"d1:ai1e",
        b"i1ex",
        b"x",
        b"",
        b"d1:bi1e1:ai2ee",
        b"d1:ai1e1:ai2ee",
        b"di1ei2ee",
    ],
)
def test_malformed_input_raises(data):
    with pytest.raises(BencodeError):
        decode(data)


def test_decode_rejects_non_bytes():
    with pytest.raises(BencodeError):
        decode("i1e")


@pytest.mark.parametrize("value", [1.5, None, {1: 2}, object()])
def test_unencodable_values_raise(value):
    with pytest.raises(BencodeError):
        encode(value)


def test_duplicate_keys_after_conversion_raise():
    with pytest.raises(BencodeError):
        encode({"a": 1, b"a": 2})


def test_error_is_value_error():
    with pytest.raises(ValueError):
        decode(b"q")