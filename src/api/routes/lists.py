"""List and task routes. Every endpoint requires a valid access token.

Endpoints:
- GET/POST /lists
- PATCH/DELETE /lists/{list_id}
- GET/POST /lists/{list_id}/tasks
- GET/PATCH/DELETE /lists/{list_id}/tasks/{task_id}

Lists and tasks of other users are reported as 404.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from api.dependencies import get_list_repo, get_task_repo
from api.models import (
    ListRequest,
    ListResponse,
    MessageResponse,
    TaskCreateRequest,
    TaskResponse,
    TaskUpdateRequest,
)
from api.security import authenticate
from domain.model.errors import NotFoundError, PersistenceError, ValidationError
from port.task_list_repository import TaskListRepository, TaskRepository
from services import list_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/lists", tags=["lists"])


def _to_http(e: Exception) -> HTTPException:
    if isinstance(e, NotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    if isinstance(e, ValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.get("", response_model=list[ListResponse])
def get_lists(
    user_id: str = Depends(authenticate),
    lists: TaskListRepository = Depends(get_list_repo),
):
    """All lists owned by the authenticated user."""
    return [ListResponse.from_domain(tl) for tl in list_service.get_lists(lists, user_id)]


@router.post("", response_model=ListResponse)
def create_list(
    request: ListRequest,
    user_id: str = Depends(authenticate),
    lists: TaskListRepository = Depends(get_list_repo),
):
    try:
        task_list = list_service.create_list(lists, user_id, request.title)
    except (ValidationError, PersistenceError) as e:
        raise _to_http(e)
    return ListResponse.from_domain(task_list)


@router.patch("/{list_id}", response_model=MessageResponse)
def update_list(
    list_id: str,
    request: ListRequest,
    user_id: str = Depends(authenticate),
    lists: TaskListRepository = Depends(get_list_repo),
):
    try:
        list_service.rename_list(lists, user_id, list_id, request.title)
    except (NotFoundError, ValidationError) as e:
        raise _to_http(e)
    return MessageResponse(message="Updated successfully.")


@router.delete("/{list_id}", response_model=ListResponse)
def delete_list(
    list_id: str,
    user_id: str = Depends(authenticate),
    lists: TaskListRepository = Depends(get_list_repo),
    tasks: TaskRepository = Depends(get_task_repo),
):
    """Delete a list and every task in it."""
    try:
        removed = list_service.delete_list(lists, tasks, user_id, list_id)
    except NotFoundError as e:
        raise _to_http(e)
    return ListResponse.from_domain(removed)


@router.get("/{list_id}/tasks", response_model=list[TaskResponse])
def get_tasks(
    list_id: str,
    user_id: str = Depends(authenticate),
    lists: TaskListRepository = Depends(get_list_repo),
    tasks: TaskRepository = Depends(get_task_repo),
):
    try:
        found = list_service.get_tasks(lists, tasks, user_id, list_id)
    except NotFoundError as e:
        raise _to_http(e)
    return [TaskResponse.from_domain(t) for t in found]


@router.post("/{list_id}/tasks", response_model=TaskResponse)
def create_task(
    list_id: str,
    request: TaskCreateRequest,
    user_id: str = Depends(authenticate),
    lists: TaskListRepository = Depends(get_list_repo),
    tasks: TaskRepository = Depends(get_task_repo),
):
    try:
        task = list_service.create_task(lists, tasks, user_id, list_id, request.title)
    except (NotFoundError, ValidationError, PersistenceError) as e:
        raise _to_http(e)
    return TaskResponse.from_domain(task)


@router.get("/{list_id}/tasks/{task_id}", response_model=TaskResponse)
def get_task(
    list_id: str,
    task_id: str,
    user_id: str = Depends(authenticate),
    lists: TaskListRepository = Depends(get_list_repo),
    tasks: TaskRepository = Depends(get_task_repo),
):
    try:
        task = list_service.get_task(lists, tasks, user_id, list_id, task_id)
    except NotFoundError as e:
        raise _to_http(e)
    return TaskResponse.from_domain(task)


@router.patch("/{list_id}/tasks/{task_id}", response_model=MessageResponse)
def update_task(
    list_id: str,
    task_id: str,
    request: TaskUpdateRequest,
    user_id: str = Depends(authenticate),
    lists: TaskListRepository = Depends(get_list_repo),
    tasks: TaskRepository = Depends(get_task_repo),
):
    fields = request.model_dump(exclude_unset=True, exclude_none=True)
    try:
        list_service.update_task(lists, tasks, user_id, list_id, task_id, fields)
    except (NotFoundError, ValidationError) as e:
        raise _to_http(e)
    return MessageResponse(message="Updated successfully!")


@router.delete("/{list_id}/tasks/{task_id}", response_model=TaskResponse)
def delete_task(
    list_id: str,
    task_id: str,
    user_id: str = Depends(authenticate),
    lists: TaskListRepository = Depends(get_list_repo),
    tasks: TaskRepository = Depends(get_task_repo),
):
    try:
        removed = list_service.delete_task(lists, tasks, user_id, list_id, task_id)
    except NotFoundError as e:
        raise _to_http(e)
    return TaskResponse.from_domain(removed)
