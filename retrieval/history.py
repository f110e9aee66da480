"""In-memory list of previously viewed dogs, most recent first."""

from __future__ import annotations

from collections import deque
from typing import Deque, Iterator, List, Optional

from models import CanonicalRecord


DEFAULT_HISTORY_LIMIT = 50


class ViewHistory:
    def __init__(self, limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        if limit < 0:
            raise ValueError("limit must be >= 0")
        self._items: Deque[CanonicalRecord] = deque(maxlen=limit)

    @property
    def limit(self) -> int:
        return self._items.maxlen or 0

    def record(self, item: CanonicalRecord) -> None:
        if self.limit:
            self._items.appendleft(item)

    def latest(self) -> Optional[CanonicalRecord]:
        return self._items[0] if self._items else None

    def find(self, item_id: str) -> Optional[CanonicalRecord]:
        return next((item for item in self._items if item.id == item_id), None)

    def items(self) -> List[CanonicalRecord]:
        return list(self._items)

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[CanonicalRecord]:
        return iter(list(self._items))
