"""Port definitions for list and task storage."""

from typing import Protocol

from domain.model.task_list import Task, TaskList


class TaskListRepository(Protocol):
    def save(self, task_list: TaskList) -> bool: ...

    def find_by_user(self, user_id: str) -> list[TaskList]: ...

    def get_owned(self, list_id: str, user_id: str) -> TaskList | None:
        """Return the list only if ``user_id`` owns it."""
        ...

    def update_title(self, list_id: str, user_id: str, title: str) -> bool: ...

    def delete(self, list_id: str, user_id: str) -> TaskList | None:
        """Delete an owned list and return it, or None if nothing matched."""
        ...


class TaskRepository(Protocol):
    def save(self, task: Task) -> bool: ...

    def find_by_list(self, list_id: str) -> list[Task]: ...

    def get(self, task_id: str, list_id: str) -> Task | None: ...

    def update(self, task_id: str, list_id: str, fields: dict) -> bool:
        """Apply ``fields`` (title / completed) to a task. Return True if it matched."""
        ...

    def delete(self, task_id: str, list_id: str) -> Task | None: ...

    def delete_by_list(self, list_id: str) -> int: ...
