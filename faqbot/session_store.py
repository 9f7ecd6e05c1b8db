"""
Per-key session state (pending follow-ups by user id, answer thread roots).

Kept behind a small get/set/delete interface so it can be swapped for a
shared cache when running more than one instance.
"""
from typing import Any, Optional, Protocol


class SessionStore(Protocol):
    def get(self, key: str) -> Optional[Any]: ...

    def set(self, key: str, value: Any) -> None: ...

    def delete(self, key: str) -> None: ...


class InMemorySessionStore:
    """
    Process-local store. Contents are lost on restart.
    With max_items set, the oldest entry is evicted once the store is full.
    """

    def __init__(self, max_items: Optional[int] = None):
        self.max_items = max_items
        self._items: dict[str, Any] = {}

    def get(self, key: str) -> Optional[Any]:
        return self._items.get(key)

    def set(self, key: str, value: Any) -> None:
        self._items.pop(key, None)
        self._items[key] = value
        if self.max_items is not None and len(self._items) > self.max_items:
            del self._items[next(iter(self._items))]

    def delete(self, key: str) -> None:
        self._items.pop(key, None)

    def __len__(self) -> int:
        return len(self._items)
