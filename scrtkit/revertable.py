"""A value with a pending working copy that can be committed or discarded."""

from __future__ import annotations

import copy
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class Revertable(Generic[T]):
    """Holds a committed value and, once written to, a pending copy of it.

    Reads see the pending copy if there is one. ``commit`` makes the pending
    copy current; ``revert`` throws it away.
    """

    def __init__(self, current: T) -> None:
        self.current: T = current
        self.pending: Optional[T] = None

    def commit(self) -> None:
        if self.pending is not None:
            self.current = self.pending
            self.pending = None

    def revert(self) -> None:
        self.pending = None

    def writable(self) -> T:
        """The pending copy, made from the current value on first use."""
        if self.pending is None:
            self.pending = copy.deepcopy(self.current)
        return self.pending

    def readable(self) -> T:
        """The pending copy if there is one, else the current value."""
        return self.current if self.pending is None else self.pending

    def __repr__(self) -> str:
        return f"{type(self).__name__}(current={self.current!r}, pending={self.pending!r})"