"""List and task operations, scoped to the owning user.

A task is reachable only through a list the caller owns; anything else is
reported as NotFoundError so other users' ids are not confirmed.
"""

import logging

from domain.model.errors import NotFoundError, PersistenceError
from domain.model.task_list import Task, TaskList, clean_title
from port.task_list_repository import TaskListRepository, TaskRepository

logger = logging.getLogger(__name__)


def _owned_list(lists: TaskListRepository, list_id: str, user_id: str) -> TaskList:
    task_list = lists.get_owned(list_id, user_id)
    if not task_list:
        raise NotFoundError("List not found")
    return task_list


def get_lists(lists: TaskListRepository, user_id: str) -> list[TaskList]:
    return lists.find_by_user(user_id)


def create_list(lists: TaskListRepository, user_id: str, title: str) -> TaskList:
    task_list = TaskList.create(title=title, user_id=user_id)
    if not lists.save(task_list):
        raise PersistenceError("Failed to save list")
    logger.info("List created", extra={"listId": task_list.id, "userId": user_id})
    return task_list


def rename_list(lists: TaskListRepository, user_id: str, list_id: str, title: str) -> None:
    if not lists.update_title(list_id, user_id, clean_title(title)):
        raise NotFoundError("List not found")


def delete_list(
    lists: TaskListRepository,
    tasks: TaskRepository,
    user_id: str,
    list_id: str,
) -> TaskList:
    """Delete an owned list together with all of its tasks."""
    removed = lists.delete(list_id, user_id)
    if not removed:
        raise NotFoundError("List not found")
    tasks.delete_by_list(removed.id)
    logger.info("List deleted", extra={"listId": list_id, "userId": user_id})
    return removed


def get_tasks(lists: TaskListRepository, tasks: TaskRepository, user_id: str, list_id: str) -> list[Task]:
    _owned_list(lists, list_id, user_id)
    return tasks.find_by_list(list_id)


def get_task(
    lists: TaskListRepository,
    tasks: TaskRepository,
    user_id: str,
    list_id: str,
    task_id: str,
) -> Task:
    _owned_list(lists, list_id, user_id)
    task = tasks.get(task_id, list_id)
    if not task:
        raise NotFoundError("Task not found")
    return task


def create_task(
    lists: TaskListRepository,
    tasks: TaskRepository,
    user_id: str,
    list_id: str,
    title: str,
) -> Task:
    _owned_list(lists, list_id, user_id)
    task = Task.create(title=title, list_id=list_id)
    if not tasks.save(task):
        raise PersistenceError("Failed to save task")
    return task


def update_task(
    lists: TaskListRepository,
    tasks: TaskRepository,
    user_id: str,
    list_id: str,
    task_id: str,
    fields: dict,
) -> None:
    _owned_list(lists, list_id, user_id)
    if 'title' in fields:
        fields = {**fields, 'title': clean_title(fields['title'])}
    if not tasks.update(task_id, list_id, fields):
        raise NotFoundError("Task not found")


def delete_task(
    lists: TaskListRepository,
    tasks: TaskRepository,
    user_id: str,
    list_id: str,
    task_id: str,
) -> Task:
    _owned_list(lists, list_id, user_id)
    removed = tasks.delete(task_id, list_id)
    if not removed:
        raise NotFoundError("Task not found")
    return removed
