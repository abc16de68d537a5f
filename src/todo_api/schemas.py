from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .models import Todo


def _promote_date_only(value: Any) -> Any:
    """
    Turn a date-only due date into a datetime at midnight.

    - date (but not datetime) values become midnight of that day.
    - Strings holding only an ISO8601 date ('2025-01-31') become midnight of that day.
    - Anything else is handed to pydantic's own datetime parsing unchanged.
    """
    if isinstance(value, datetime):
        return value

    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, 0, 0, 0)

    if isinstance(value, str):
        s = value.strip()
        try:
            d = date.fromisoformat(s)
        except ValueError:
            return value
        return datetime(d.year, d.month, d.day, 0, 0, 0)

    return value


# PUBLIC_INTERFACE
class TodoCreate(BaseModel):
    """
    Schema for creating a new Todo item.

    Only shape and types are checked here; the due date and name rules are
    enforced by the creation filters so that all field errors are reported together.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": 4,
                "name": "Go shopping",
                "dueDate": "2099-02-01T09:00:00Z",
                "isComplete": False,
            }
        },
    )

    id: int = Field(..., strict=True, description="Caller-supplied identifier of the todo item")
    name: str = Field(..., description="Short name for the todo item")
    due_date: datetime = Field(
        ...,
        alias="dueDate",
        description="Due date/time of the todo item. Accepts ISO8601 date or datetime; dates are set to 00:00",
    )
    is_complete: bool = Field(default=False, alias="isComplete", strict=True, description="Completion status flag")

    @field_validator("due_date", mode="before")
    @classmethod
    def parse_due_date(cls, v: Any) -> Any:
        """
        Normalize date-only due dates to midnight.
        """
        return _promote_date_only(v)

    def to_entity(self) -> Todo:
        return Todo(id=self.id, name=self.name, due_date=self.due_date, is_complete=self.is_complete)


# PUBLIC_INTERFACE
class TodoOut(BaseModel):
    """
    Schema returned by the API for a Todo item.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "name": "Learn C#",
                "dueDate": "2025-01-26T09:00:00Z",
                "isComplete": False,
            }
        },
    )

    id: int = Field(..., description="Identifier of the todo item")
    name: str = Field(..., description="Short name for the todo item")
    due_date: datetime = Field(..., alias="dueDate", description="Due date/time as an ISO8601 datetime")
    is_complete: bool = Field(..., alias="isComplete", description="Completion status flag")

    @classmethod
    def from_entity(cls, todo: Todo) -> "TodoOut":
        return cls(id=todo.id, name=todo.name, due_date=todo.due_date, is_complete=todo.is_complete)
