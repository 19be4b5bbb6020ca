"""
Repository: storage operations for activities.

The store is a plain list held in process memory. It keeps insertion
order and knows nothing about ids being generated, timestamps being
stamped, or how listings are sorted: that lives in `ActivityService`.

Important notes:
- All state is lost when the process exits. There is no persistence.
- Lookups are linear scans. Collections are expected to stay small.
- Callers are responsible for keeping ids unique; `replace()` is how a
  record with an existing id is written back.
"""

from typing import List, Optional
from models import Activity


class ActivityRepo:
    """In-memory collection access only. No business logic here."""

    def __init__(self):
        self._items: List[Activity] = []

    def __len__(self) -> int:
        return len(self._items)

    def all(self) -> List[Activity]:
        """Return a copy of the collection in insertion order."""

        return list(self._items)

    def _index_of(self, activity_id: str) -> int:
        for i, a in enumerate(self._items):
            if a.id == activity_id:
                return i
        return -1

    def get(self, activity_id: str) -> Optional[Activity]:
        index = self._index_of(activity_id)
        return self._items[index] if index != -1 else None

    def add(self, activity: Activity) -> None:
        self._items.append(activity)

    def replace(self, activity: Activity) -> bool:
        """Overwrite the record with the same id in place.

        Returns False (and stores nothing) if no such record exists.
        """

        index = self._index_of(activity.id)
        if index == -1:
            return False
        self._items[index] = activity
        return True

    def remove(self, activity_id: str) -> bool:
        index = self._index_of(activity_id)
        if index == -1:
            return False
        del self._items[index]
        return True
