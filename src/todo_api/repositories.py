from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from threading import RLock
from typing import Iterable, List, Optional

from .models import Todo

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
class TodoStore(ABC):
    """Abstract storage contract for todo records."""

    @abstractmethod
    def list_all(self) -> List[Todo]:
        """Return every stored Todo in insertion order."""

    @abstractmethod
    def get_by_id(self, todo_id: int) -> Optional[Todo]:
        """Return the first Todo whose id matches, or None if there is none."""

    @abstractmethod
    def add(self, todo: Todo) -> None:
        """Append a Todo. Duplicate ids are accepted as-is."""

    @abstractmethod
    def delete_by_id(self, todo_id: int) -> int:
        """
        Remove every Todo whose id matches and return how many were removed.
        Removing an unknown id is not an error.
        """


class InMemoryTodoStore(TodoStore):
    """
    Thread-safe list-backed store. Contents are lost when the process exits.
    """

    def __init__(self, todos: Optional[Iterable[Todo]] = None) -> None:
        self._lock = RLock()
        self._items: List[Todo] = list(todos or [])

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def list_all(self) -> List[Todo]:
        with self._lock:
            return list(self._items)

    def get_by_id(self, todo_id: int) -> Optional[Todo]:
        with self._lock:
            return next((t for t in self._items if t.id == todo_id), None)

    def add(self, todo: Todo) -> None:
        with self._lock:
            self._items.append(todo)
        logger.debug("Added todo id=%d", todo.id)

    def delete_by_id(self, todo_id: int) -> int:
        with self._lock:
            kept = [t for t in self._items if t.id != todo_id]
            removed = len(self._items) - len(kept)
            self._items = kept
        if removed:
            logger.debug("Deleted %d todo(s) with id=%d", removed, todo_id)
        return removed


# PUBLIC_INTERFACE
def seed_todos(now: datetime) -> List[Todo]:
    """Return the three sample todos a fresh store starts with, due 1-3 days after now."""
    return [
        Todo(1, "Learn C#", now + timedelta(days=1), False),
        Todo(2, "Build awesome apps", now + timedelta(days=2), False),
        Todo(3, "Contribute to OSS", now + timedelta(days=3), False),
    ]
