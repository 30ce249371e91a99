"""Pydantic models for API request/response.

Response models never carry ``password_hash`` or ``sessions``; ids are
serialized as ``_id``.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from domain.model.task_list import Task, TaskList
from domain.model.user import User


class CredentialsRequest(BaseModel):
    """Request body for signup and login."""
    email: str
    password: str


class UserResponse(BaseModel):
    """Public representation of a user."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    email: str
    created_at: datetime

    @staticmethod
    def from_domain(user: User) -> 'UserResponse':
        return UserResponse(id=user.id, email=user.email, created_at=user.created_at)


class AccessTokenResponse(BaseModel):
    accessToken: str


class SessionsRevokedResponse(BaseModel):
    message: str
    revoked: int = Field(0, description="Number of sessions removed")


class ListRequest(BaseModel):
    title: str


class TaskCreateRequest(BaseModel):
    title: str


class TaskUpdateRequest(BaseModel):
    title: Optional[str] = None
    completed: Optional[bool] = None


class ListResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    title: str
    user_id: str
    created_at: datetime

    @staticmethod
    def from_domain(task_list: TaskList) -> 'ListResponse':
        return ListResponse(
            id=task_list.id,
            title=task_list.title,
            user_id=task_list.user_id,
            created_at=task_list.created_at,
        )


class TaskResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    title: str
    list_id: str
    completed: bool
    created_at: datetime

    @staticmethod
    def from_domain(task: Task) -> 'TaskResponse':
        return TaskResponse(
            id=task.id,
            title=task.title,
            list_id=task.list_id,
            completed=task.completed,
            created_at=task.created_at,
        )


class MessageResponse(BaseModel):
    message: str
