import pytest

from voxelhex.bencode import BencodeError, decode, encode
from voxelhex.object_pool import ObjectPool


def _float_pool():
    return ObjectPool(float, 3)


def test_push_pop_modify():
    pool = _float_pool()
    test_value = 5.0
    key = pool.push(test_value)
    assert pool[key] == test_value

    pool[key] = 10.0
    assert pool[key] == 10.0

    assert pool.pop(key) == 10.0
    assert pool.pop(key) is None


def test_push_deallocate():
    pool = _float_pool()
    test_value = 5.0
    key = pool.push(test_value)
    assert pool[key] == test_value

    pool.free(key)
    assert pool.pop(key) is None


def test_edge_case_reused_item():
    pool = _float_pool()
    test_value = 5.0
    key_1 = pool.push(test_value)
    pool.push(test_value * 2.0)
    pool.pop(key_1)
    assert pool.first_available == 0

    pool.push(test_value * 3.0)
    assert pool[key_1] == test_value * 3.0


def test_keys_are_sequential_when_nothing_freed():
    pool = _float_pool()
    keys = [pool.push(float(v)) for v in range(5)]
    assert keys == list(range(5))
    assert len(pool) == 5


def test_allocate_gives_default_value():
    pool = _float_pool()
    key = pool.allocate()
    assert pool[key] == 0.0
    assert key in pool


def test_pop_resets_slot_to_default():
    pool = ObjectPool(list)
    key = pool.push([1, 2])
    assert pool.pop(key) == [1, 2]
    assert pool.allocate() == key
    assert pool[key] == []


def test_free_returns_whether_key_was_used():
    pool = _float_pool()
    key = pool.push(1.0)
    assert pool.free(key) is True
    assert pool.free(key) is False
    assert pool.free(99) is False
    assert key not in pool


def test_freed_middle_key_is_reused():
    pool = _float_pool()
    keys = [pool.push(float(v)) for v in range(4)]
    pool.free(keys[2])
    assert pool.push(7.0) == keys[2]
    assert len(pool) == 4


def test_invalid_key_access_raises():
    pool = _float_pool()
    with pytest.raises(KeyError):
        pool[0]
    key = pool.push(1.0)
    pool.free(key)
    with pytest.raises(KeyError):
        pool[key]
    with pytest.raises(KeyError):
        pool[key] = 2.0
    assert key not in pool
    assert len(pool) == 1
    assert pool.pop(key) is None


def test_contains_rejects_non_keys():
    pool = _float_pool()
    pool.push(1.0)
    assert 0 in pool
    assert -1 not in pool
    assert "0" not in pool


def test_swap_exchanges_slots():
    pool = _float_pool()
    a = pool.push(1.0)
    b = pool.push(2.0)
    pool.swap(a, b)
    assert pool[a] == 2.0
    assert pool[b] == 1.0


def test_bencode_round_trip():
    pool = _float_pool()
    keys = [pool.push(float(v)) for v in range(4)]
    pool.free(keys[1])

    wire = encode(pool.to_bencode_object(lambda item: int(item * 1000)))
    restored = ObjectPool.from_bencode_object(
        decode(wire), lambda obj: obj / 1000, float
    )

    assert len(restored) == len(pool)
    assert restored.first_available == pool.first_available
    for key in range(len(pool)):
        assert (key in restored) == (key in pool)
    assert [restored[k] for k in (0, 2, 3)] == [0.0, 2.0, 3.0]
    assert restored.push(9.0) == keys[1]


@pytest.mark.parametrize(
    "obj",
    [
        b"not a list",
        [1],
        [b"x", []],
        [-1, []],
        [0, b"x"],
        [0, [[2, 0]]],
        [0, [[0]]],
    ],
)
def test_from_bencode_object_rejects_bad_input(obj):
    with pytest.raises(BencodeError):
        ObjectPool.from_bencode_object(obj, lambda o: o, int)


def test_negative_capacity_raises():
    with pytest.raises(ValueError):
        ObjectPool(float, -1)