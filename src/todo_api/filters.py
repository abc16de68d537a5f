"""
Creation filters for incoming todos.

A filter is a callable taking the proposed Todo and the current time. It either
returns, letting the next filter run, or raises ValidationFailure to stop the
request before the todo reaches the store. Filters are composed in order when
the application is built.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable, Dict, List, Mapping, Optional, Sequence

from .models import Todo

TodoFilter = Callable[[Todo, datetime], None]
FieldErrors = Dict[str, List[str]]

MIN_NAME_LENGTH = 3


class ValidationFailure(Exception):
    """Raised by a filter when the proposed todo breaks one or more field rules."""

    def __init__(self, errors: Mapping[str, Sequence[str]]) -> None:
        self.errors: FieldErrors = {field: list(messages) for field, messages in errors.items()}
        super().__init__(f"validation failed for: {', '.join(self.errors)}")


def _now_matching(due: datetime, now: datetime) -> datetime:
    # naive due dates are local wall-clock time; only the clock is converted
    if due.tzinfo is None:
        return now.astimezone().replace(tzinfo=None) if now.tzinfo is not None else now
    return now if now.tzinfo is not None else now.astimezone()


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def check_due_date(todo: Todo, now: datetime) -> Optional[str]:
    if todo.due_date <= _now_matching(todo.due_date, now):
        return "Due date must be in the future"
    return None


def check_name(todo: Todo, now: datetime) -> Optional[str]:
    if len(todo.name) < MIN_NAME_LENGTH:
        return f"Name must be at least {MIN_NAME_LENGTH} characters long"
    return None


# Checked in this order; every check runs even when an earlier one fails.
FIELD_CHECKS = (
    ("DueDate", check_due_date),
    ("Name", check_name),
)


# PUBLIC_INTERFACE
def collect_field_errors(todo: Todo, now: datetime) -> FieldErrors:
    """Run every field check against the todo and return the failures keyed by field."""
    errors: FieldErrors = {}
    for field, check in FIELD_CHECKS:
        message = check(todo, now)
        if message is not None:
            errors.setdefault(field, []).append(message)
    return errors


# PUBLIC_INTERFACE
def validate_new_todo(todo: Todo, now: datetime) -> None:
    """
    Creation filter enforcing a future due date and a name of at least three characters.

    Raises:
        ValidationFailure listing every failing field.
    """
    errors = collect_field_errors(todo, now)
    if errors:
        raise ValidationFailure(errors)


DEFAULT_CREATE_FILTERS: Sequence[TodoFilter] = (validate_new_todo,)


# PUBLIC_INTERFACE
def run_filters(filters: Sequence[TodoFilter], todo: Todo, now: datetime) -> None:
    """Run filters in order; the first one to raise stops the chain."""
    for todo_filter in filters:
        todo_filter(todo, now)
