"""User routes: signup, login, access-token refresh, logout.

Endpoints:
- POST /users: Sign up
- POST /users/login: Log in
- GET /users/me: Current user (access token)
- GET /users/me/access-token: New access token (refresh session)
- DELETE /users/me/session: Revoke the presented refresh token
- DELETE /users/me/sessions: Revoke every session of the user

Handlers are plain ``def`` so bcrypt and pymongo calls run in the
threadpool instead of blocking the event loop.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from api.dependencies import get_auth_settings, get_session_manager, get_token_issuer, get_user_repo
from api.models import AccessTokenResponse, CredentialsRequest, SessionsRevokedResponse, UserResponse
from api.security import (
    ACCESS_TOKEN_HEADER,
    REFRESH_TOKEN_HEADER,
    SessionContext,
    authenticate,
    verify_session,
)
from domain.model.errors import DomainError, SessionNotFoundError, TokenSigningError
from domain.model.user import User
from port.user_repository import UserRepository
from services import auth_service
from services.session_service import SessionManager
from services.token_service import TokenIssuer
from utils.config import AuthSettings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


def _issue_tokens(user: User, response: Response, sessions: SessionManager, issuer: TokenIssuer) -> None:
    """Create a session and an access token and put both in response headers.

    The access token is signed first, so a signing failure stores no session.
    Any failure aborts the whole request; no half-issued credentials are returned.
    """
    access_token = issuer.generate_access_token(user.id)
    refresh_token = sessions.create_session(user)
    response.headers[REFRESH_TOKEN_HEADER] = refresh_token
    response.headers[ACCESS_TOKEN_HEADER] = access_token


@router.post("", response_model=UserResponse)
def signup(
    request: CredentialsRequest,
    response: Response,
    repo: UserRepository = Depends(get_user_repo),
    sessions: SessionManager = Depends(get_session_manager),
    issuer: TokenIssuer = Depends(get_token_issuer),
    settings: AuthSettings = Depends(get_auth_settings),
):
    """Sign up and return the user with fresh access and refresh tokens.

    Raises:
        HTTPException: 400 on invalid input, duplicate email, or store failure;
            500 if a token cannot be minted
    """
    try:
        user = auth_service.create_user(repo, request.email, request.password, settings.bcrypt_rounds)
        _issue_tokens(user, response, sessions, issuer)
    except TokenSigningError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    except DomainError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    logger.info("User signed up", extra={"userId": user.id})
    return UserResponse.from_domain(user)


@router.post("/login", response_model=UserResponse)
def login(
    request: CredentialsRequest,
    response: Response,
    repo: UserRepository = Depends(get_user_repo),
    sessions: SessionManager = Depends(get_session_manager),
    issuer: TokenIssuer = Depends(get_token_issuer),
    settings: AuthSettings = Depends(get_auth_settings),
):
    """Log in and return the user with fresh access and refresh tokens.

    Raises:
        HTTPException: 400 on invalid credentials or store failure;
            500 if a token cannot be minted
    """
    try:
        user = auth_service.verify_credentials(repo, request.email, request.password, settings.bcrypt_rounds)
        _issue_tokens(user, response, sessions, issuer)
    except TokenSigningError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))
    except DomainError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    logger.info("User logged in", extra={"userId": user.id})
    return UserResponse.from_domain(user)


@router.get("/me", response_model=UserResponse)
def get_me(
    user_id: str = Depends(authenticate),
    repo: UserRepository = Depends(get_user_repo),
):
    """Current user, identified by the access token."""
    user = repo.get_by_id(user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return UserResponse.from_domain(user)


@router.get("/me/access-token", response_model=AccessTokenResponse)
def refresh_access_token(
    response: Response,
    context: SessionContext = Depends(verify_session),
    issuer: TokenIssuer = Depends(get_token_issuer),
):
    """Exchange a valid refresh session for a new access token.

    The token is returned both in the ``x-access-token`` header and the body.
    """
    try:
        access_token = issuer.generate_access_token(context.user_id)
    except TokenSigningError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    response.headers[ACCESS_TOKEN_HEADER] = access_token
    return AccessTokenResponse(accessToken=access_token)


@router.delete("/me/session", response_model=SessionsRevokedResponse)
def logout(
    context: SessionContext = Depends(verify_session),
    sessions: SessionManager = Depends(get_session_manager),
):
    """Revoke the session carrying the presented refresh token."""
    try:
        sessions.revoke_session(context.user_id, context.refresh_token)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    return SessionsRevokedResponse(message="Logged out", revoked=1)


@router.delete("/me/sessions", response_model=SessionsRevokedResponse)
def logout_everywhere(
    context: SessionContext = Depends(verify_session),
    sessions: SessionManager = Depends(get_session_manager),
):
    """Revoke every session of the user, including the presented one."""
    count = sessions.revoke_all_sessions(context.user_id)
    return SessionsRevokedResponse(message="Logged out of all sessions", revoked=count)
