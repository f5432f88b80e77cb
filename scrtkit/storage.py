"""In-memory key-value storage for contracts, plain and revertable."""

from __future__ import annotations

import enum
from typing import Iterator, Optional

from scrtkit.revertable import Revertable

KV = tuple[bytes, bytes]


class Order(enum.Enum):
    """Iteration order of a range query."""

    ASCENDING = 1
    DESCENDING = 2


class TestStorage:
    """A sorted byte-keyed store."""

    __test__ = False

    def __init__(self, data: Optional[dict] = None) -> None:
        self._data: dict[bytes, bytes] = {
            bytes(key): bytes(value) for key, value in (data or {}).items()
        }

    def get(self, key: bytes) -> Optional[bytes]:
        return self._data.get(bytes(key))

    def set(self, key: bytes, value: bytes) -> None:
        self._data[bytes(key)] = bytes(value)

    def remove(self, key: bytes) -> None:
        self._data.pop(bytes(key), None)

    def range(
        self,
        start: Optional[bytes] = None,
        end: Optional[bytes] = None,
        order: Order = Order.ASCENDING,
    ) -> Iterator[KV]:
        """Pairs with ``start <= key < end``; a missing bound is open, an inverted range is empty."""
        low = None if start is None else bytes(start)
        high = None if end is None else bytes(end)
        keys = sorted(
            key
            for key in self._data
            if (low is None or key >= low) and (high is None or key < high)
        )
        if order is Order.DESCENDING:
            keys.reverse()
        return iter([(key, self._data[key]) for key in keys])

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TestStorage):
            return NotImplemented
        return self._data == other._data

    def __repr__(self) -> str:
        return f"TestStorage({self._data!r})"


class RevertableStorage(Revertable[TestStorage]):
    """Storage whose writes stay pending until committed."""

    def __init__(self, current: Optional[TestStorage] = None) -> None:
        super().__init__(TestStorage() if current is None else current)

    def get(self, key: bytes) -> Optional[bytes]:
        return self.readable().get(key)

    def set(self, key: bytes, value: bytes) -> None:
        self.writable().set(key, value)

    def remove(self, key: bytes) -> None:
        self.writable().remove(key)

    def range(
        self,
        start: Optional[bytes] = None,
        end: Optional[bytes] = None,
        order: Order = Order.ASCENDING,
    ) -> Iterator[KV]:
        return self.readable().range(start, end, order)

    def commit(self) -> None:
        super().commit()

    def revert(self) -> None:
        super().revert()