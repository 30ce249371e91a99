"""List and task domain models."""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone

from domain.model.errors import ValidationError


def clean_title(title: str | None) -> str:
    cleaned = (title or '').strip()
    if not cleaned:
        raise ValidationError("Title must not be empty")
    return cleaned


@dataclass
class TaskList:
    """A to-do list owned by a single user."""
    id: str
    title: str
    user_id: str
    created_at: datetime

    @staticmethod
    def create(title: str, user_id: str) -> 'TaskList':
        return TaskList(
            id=uuid.uuid4().hex,
            title=clean_title(title),
            user_id=user_id,
            created_at=datetime.now(timezone.utc),
        )


@dataclass
class Task:
    """A task inside a TaskList. Ownership is inherited from the list."""
    id: str
    title: str
    list_id: str
    created_at: datetime
    completed: bool = False

    @staticmethod
    def create(title: str, list_id: str) -> 'Task':
        return Task(
            id=uuid.uuid4().hex,
            title=clean_title(title),
            list_id=list_id,
            created_at=datetime.now(timezone.utc),
        )
