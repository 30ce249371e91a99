from functools import lru_cache

from fastapi import Depends, HTTPException

from adapter.mongodb.connection import get_mongodb_client, DATABASE_NAME
from adapter.mongodb.task_list_repository import MongoTaskListRepository, MongoTaskRepository
from adapter.mongodb.user_repository import MongoUserRepository
from port.task_list_repository import TaskListRepository, TaskRepository
from port.user_repository import UserRepository
from services.session_service import SessionManager
from services.token_service import TokenIssuer
from utils.config import AuthSettings, load_auth_settings


def _get_db():
    """Get MongoDB database, raising 503 if unavailable."""
    client = get_mongodb_client()
    if client is None:
        raise HTTPException(status_code=503, detail="Database unavailable")
    return client[DATABASE_NAME]


def get_user_repo() -> UserRepository:
    return MongoUserRepository(_get_db())


def get_list_repo() -> TaskListRepository:
    return MongoTaskListRepository(_get_db())


def get_task_repo() -> TaskRepository:
    return MongoTaskRepository(_get_db())


@lru_cache(maxsize=1)
def get_auth_settings() -> AuthSettings:
    """Read auth settings from the environment once per process."""
    return load_auth_settings()


def get_token_issuer(settings: AuthSettings = Depends(get_auth_settings)) -> TokenIssuer:
    return TokenIssuer(settings)


def get_session_manager(
    repo: UserRepository = Depends(get_user_repo),
    issuer: TokenIssuer = Depends(get_token_issuer),
    settings: AuthSettings = Depends(get_auth_settings),
) -> SessionManager:
    return SessionManager(repo, issuer, settings)
