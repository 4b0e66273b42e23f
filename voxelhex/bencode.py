"""Minimal, strict bencode encoder and decoder.

Decoded values use plain Python types: integers become ``int``, byte strings
become ``bytes``, lists become ``list`` and dictionaries become ``dict`` with
``bytes`` keys.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

__all__ = ["BencodeError", "encode", "decode"]

_INTEGER = re.compile(rb"-?(?:0|[1-9][0-9]*)")
_LENGTH = re.compile(rb"0|[1-9][0-9]*")


class BencodeError(ValueError):
    """Raised when a value cannot be encoded or a byte stream is not valid bencode."""


def encode(value: Any) -> bytes:
    """Encode a value (int, bool, bytes, str, list, tuple or mapping) as bencode."""
    out = bytearray()
    _encode_into(value, out)
    return bytes(out)


def _encode_into(value: Any, out: bytearray) -> None:
    if isinstance(value, bool):
        out += b"i%de" % int(value)
    elif isinstance(value, int):
        out += b"i%de" % value
    elif isinstance(value, (bytes, bytearray, memoryview)):
        raw = bytes(value)
        out += b"%d:" % len(raw)
        out += raw
    elif isinstance(value, str):
        _encode_into(value.encode("utf-8"), out)
    elif isinstance(value, (list, tuple)):
        out += b"l"
        for item in value:
            _encode_into(item, out)
        out += b"e"
    elif isinstance(value, Mapping):
        entries = {}
        for key, item in value.items():
            if isinstance(key, str):
                key = key.encode("utf-8")
            elif isinstance(key, (bytes, bytearray)):
                key = bytes(key)
            else:
                raise BencodeError(f"dictionary keys must be strings, not {type(key).__name__}")
            if key in entries:
                raise BencodeError(f"duplicate dictionary key {key!r}")
            entries[key] = item
        out += b"d"
        for key in sorted(entries):
            _encode_into(key, out)
            _encode_into(entries[key], out)
        out += b"e"
    else:
        raise BencodeError(f"cannot bencode a value of type {type(value).__name__}")


def decode(data: bytes | bytearray | memoryview) -> Any:
    """Decode one complete bencode value; trailing bytes are an error."""
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise BencodeError(f"expected bytes, got {type(data).__name__}")
    raw = bytes(data)
    value, end = _decode_at(raw, 0)
    if end != len(raw):
        raise BencodeError(f"trailing data after position {end}")
    return value


def _decode_at(data: bytes, pos: int) -> tuple[Any, int]:
    if pos >= len(data):
        raise BencodeError("unexpected end of data")
    marker = data[pos : pos + 1]
    if marker == b"i":
        end = data.find(b"e", pos + 1)
        if end == -1:
            raise BencodeError("unterminated integer")
        text = data[pos + 1 : end]
        if not _INTEGER.fullmatch(text) or text == b"-0":
            raise BencodeError(f"malformed integer {text!r}")
        return int(text), end + 1
    if marker == b"l":
        items = []
        pos += 1
        while True:
            if pos >= len(data):
                raise BencodeError("unterminated list")
            if data[pos : pos + 1] == b"e":
                return items, pos + 1
            item, pos = _decode_at(data, pos)
            items.append(item)
    if marker == b"d":
        result: dict[bytes, Any] = {}
        previous: bytes | None = None
        pos += 1
        while True:
            if pos >= len(data):
                raise BencodeError("unterminated dictionary")
            if data[pos : pos + 1] == b"e":
                return result, pos + 1
            key, pos = _decode_at(data, pos)
            if not isinstance(key, bytes):
                raise BencodeError("dictionary key is not a byte string")
            if previous is not None and key <= previous:
                raise BencodeError(f"dictionary keys out of order at {key!r}")
            previous = key
            result[key], pos = _decode_at(data, pos)
    if marker.isdigit():
        colon = data.find(b":", pos)
        if colon == -1:
            raise BencodeError("unterminated string length")
        text = data[pos:colon]
        if not _LENGTH.fullmatch(text):
            raise BencodeError(f"malformed string length {text!r}")
        end = colon + 1 + int(text)
        if end > len(data):
            raise BencodeError("string runs past the end of data")
        return data[colon + 1 : end], end
    raise BencodeError(f"unexpected byte {marker!r} at position {pos}")