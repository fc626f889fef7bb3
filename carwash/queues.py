# Copyright (c) 2025
# MIT License
# -----------------------------------------------------------------------------
# queues.py
# -----------------------------------------------------------------------------
# Purpose:
#   Bounded FIFO queue of named cars waiting for the wash bay.
#
# Design notes:
#   - Full and empty are normal steady-state conditions, so arrival() and
#     departure() report them as False instead of raising.
#   - Storage is a deque; callers only see arrival/departure/size.
#
# Usage:
#   from carwash.queues import BoundedQueue
# -----------------------------------------------------------------------------

from __future__ import annotations
from collections import deque
from typing import Deque, Optional

from .config import ConfigError

class BoundedQueue:
    """Fixed-capacity FIFO queue of item identifiers.

    Parameters
    ----------
    capacity : int
        Maximum number of items held at once (must be positive).

    Notes
    -----
    - arrival() appends at the tail unless the queue is full.
    - departure() drops the head unless the queue is empty.
    """
    def __init__(self, capacity: int):
        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
            raise ConfigError(f"queue capacity must be a positive integer, got {capacity!r}")
        self.capacity = capacity
        self._items: Deque[str] = deque()

    def arrival(self, item: str) -> bool:
        if len(self._items) >= self.capacity:
            return False
        self._items.append(item)
        return True

    def departure(self) -> bool:
        if not self._items:
            return False
        self._items.popleft()
        return True

    # Spelling used by the queueing literature
    admit = arrival
    remove = departure

    @property
    def size(self) -> int:
        return len(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def is_full(self) -> bool:
        return len(self._items) >= self.capacity

    def is_empty(self) -> bool:
        return not self._items

    def peek(self) -> Optional[str]:
        """Return the head item without removing it (None when empty)."""
        return self._items[0] if self._items else None

    def __repr__(self) -> str:
        return f"BoundedQueue(size={len(self._items)}, capacity={self.capacity})"
