"""Request guards for access tokens and refresh-token sessions.

Both guards are FastAPI dependencies. A failing guard raises a 401
HTTPException, so the route body never runs.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Header, HTTPException, status

from api.dependencies import get_session_manager, get_token_issuer, get_user_repo
from domain.model.errors import InvalidTokenError, SessionExpiredError, SessionNotFoundError
from domain.model.user import User
from port.user_repository import UserRepository
from services import auth_service
from services.session_service import SessionManager
from services.token_service import TokenIssuer

logger = logging.getLogger(__name__)

ACCESS_TOKEN_HEADER = "x-access-token"
REFRESH_TOKEN_HEADER = "x-refresh-token"
USER_ID_HEADER = "_id"

USER_NOT_FOUND_DETAIL = "User not found. Make sure that the Refresh Token and User ID are correct."


@dataclass
class SessionContext:
    """What the session guard attaches to the request."""
    user_id: str
    user: User
    refresh_token: str


def authenticate(
    x_access_token: Optional[str] = Header(None),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> str:
    """Verify the access token and return the user id it was issued for.

    Stateless: only signature and expiry are checked, the store is not read.

    Raises:
        HTTPException: 401 for a missing, invalid, or expired token
    """
    try:
        return issuer.verify_access_token(x_access_token)
    except InvalidTokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        )


def verify_session(
    x_refresh_token: Optional[str] = Header(None),
    user_id: Optional[str] = Header(None, alias=USER_ID_HEADER, convert_underscores=False),
    repo: UserRepository = Depends(get_user_repo),
    sessions: SessionManager = Depends(get_session_manager),
) -> SessionContext:
    """Verify a refresh token against the sessions stored for the user.

    Raises:
        HTTPException: 401 if the user/token pair is unknown, or if every
            matching session has expired
    """
    try:
        user = auth_service.find_by_id_and_session_token(repo, user_id, x_refresh_token)
    except SessionNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=USER_NOT_FOUND_DETAIL,
        )

    try:
        sessions.require_valid_session(user, x_refresh_token)
    except SessionExpiredError as e:
        logger.info("Rejected expired or invalid session", extra={"userId": user.id})
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        )

    return SessionContext(user_id=user.id, user=user, refresh_token=x_refresh_token)
