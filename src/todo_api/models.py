from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


# PUBLIC_INTERFACE
@dataclass(frozen=True)
class Todo:
    """
    A single task record as held by the store.

    Fields:
    - id: Caller-supplied integer identifier; the store does not enforce uniqueness
    - name: Short name of the task
    - due_date: When the task is due (naive values are read as local time)
    - is_complete: Completion flag

    Instances are never mutated; there is no update operation.
    """

    id: int
    name: str
    due_date: datetime
    is_complete: bool = False
