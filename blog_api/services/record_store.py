from __future__ import annotations

import copy
from threading import Lock
from typing import Callable, Generic, Protocol, TypeVar


class HasId(Protocol):
    id: int


T = TypeVar("T", bound=HasId)


class RecordStore(Generic[T]):
    """In-memory, id-indexed collection owned by one service.

    Every mutation runs under the lock, and readers only ever get copies, so a
    listing never sees a record halfway through an update.
    """

    def __init__(self):
        self._rows: dict[int, T] = {}
        self._next_id = 1
        self._lock = Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._rows)

    def add(self, build: Callable[[int], T]) -> T:
        with self._lock:
            row = build(self._next_id)
            self._rows[row.id] = row
            self._next_id += 1
            return copy.copy(row)

    def get(self, row_id: int) -> T | None:
        with self._lock:
            row = self._rows.get(row_id)
            return copy.copy(row) if row is not None else None

    def update(self, row_id: int, mutate: Callable[[T], None]) -> T | None:
        with self._lock:
            row = self._rows.get(row_id)
            if row is None:
                return None
            draft = copy.copy(row)
            mutate(draft)
            self._rows[row_id] = draft
            return copy.copy(draft)

    def snapshot(self) -> list[T]:
        with self._lock:
            return [copy.copy(row) for row in self._rows.values()]
