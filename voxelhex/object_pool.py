"""A pool of reusable slots addressed by integer keys."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

from .bencode import BencodeError

__all__ = ["ObjectPool"]

T = TypeVar("T")


@dataclass
class _Slot(Generic[T]):
    reserved: bool
    item: T


class ObjectPool(Generic[T]):
    """Stores reusable objects so that freed keys are handed out again.

    ``factory`` produces the default value placed into new or emptied slots.
    ``capacity`` is only a sizing hint.
    """

    def __init__(self, factory: Callable[[], T], capacity: int = 0) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self._factory = factory
        self._buffer: list[_Slot[T]] = []
        self._first_available = 0

    def __len__(self) -> int:
        return len(self._buffer)

    def __contains__(self, key: object) -> bool:
        return (
            isinstance(key, int)
            and 0 <= key < len(self._buffer)
            and self._buffer[key].reserved
        )

    def __getitem__(self, key: int) -> T:
        if key not in self:
            raise KeyError(key)
        return self._buffer[key].item

    def __setitem__(self, key: int, item: T) -> None:
        if key not in self:
            raise KeyError(key)
        self._buffer[key].item = item

    @property
    def first_available(self) -> int:
        """Index where the search for a free slot starts."""
        return self._first_available

    def _is_next_available(self) -> bool:
        nxt = self._first_available + 1
        return nxt < len(self._buffer) and not self._buffer[nxt].reserved

    def _check_first_available(self) -> bool:
        if (
            self._first_available < len(self._buffer)
            and not self._buffer[self._first_available].reserved
        ):
            return True
        if self._is_next_available():
            self._first_available += 1
            return True
        self._first_available = len(self._buffer)
        return False

    def push(self, item: T) -> int:
        """Store ``item`` in a free slot and return its key."""
        key = self.allocate()
        self._buffer[key].item = item
        return key

    def allocate(self) -> int:
        """Reserve a slot holding the default value and return its key."""
        if self._check_first_available():
            self._buffer[self._first_available].reserved = True
            key = self._first_available
        else:
            self._buffer.append(_Slot(True, self._factory()))
            key = len(self._buffer) - 1
        if self._is_next_available():
            self._first_available += 1
        return key

    def pop(self, key: int) -> Optional[T]:
        """Release ``key`` and return its item, or None if the key is not in use."""
        if key not in self:
            return None
        slot = self._buffer[key]
        slot.reserved = False
        self._first_available = min(self._first_available, key)
        item, slot.item = slot.item, self._factory()
        return item

    def free(self, key: int) -> bool:
        """Release ``key`` keeping its item; return whether it was in use."""
        if key not in self:
            return False
        self._buffer[key].reserved = False
        self._first_available = min(self._first_available, key)
        return True

    def swap(self, src: int, dst: int) -> None:
        """Exchange two slots, reservation state included."""
        self._buffer[src], self._buffer[dst] = self._buffer[dst], self._buffer[src]

    def to_bencode_object(self, encode_item: Callable[[T], Any]) -> list:
        """Return a bencodable representation using ``encode_item`` for items."""
        return [
            self._first_available,
            [[int(slot.reserved), encode_item(slot.item)] for slot in self._buffer],
        ]

    @staticmethod
    def from_bencode_object(
        obj: Any, decode_item: Callable[[Any], T], factory: Callable[[], T]
    ) -> "ObjectPool[T]":
        """Rebuild a pool from the output of :meth:`to_bencode_object`."""
        if not isinstance(obj, list) or len(obj) < 2:
            raise BencodeError("expected a list of object pool fields")
        first_available, entries = obj[0], obj[1]
        if isinstance(first_available, bool) or not isinstance(first_available, int):
            raise BencodeError("expected integer field first_available")
        if first_available < 0:
            raise BencodeError("field first_available must not be negative")
        if not isinstance(entries, list):
            raise BencodeError("expected a list of pool items")
        pool: ObjectPool[T] = ObjectPool(factory)
        for entry in entries:
            if not isinstance(entry, list) or len(entry) < 2:
                raise BencodeError("expected a list of pool item fields")
            reserved = entry[0]
            if isinstance(reserved, bool) or reserved not in (0, 1):
                raise BencodeError(f"boolean field reserved holds {reserved!r}")
            pool._buffer.append(_Slot(bool(reserved), decode_item(entry[1])))
        pool._first_available = first_available
        return pool