"""Session manager: refresh-token sessions embedded in the user document."""

import logging
import time
from typing import Callable

from domain.model.errors import PersistenceError, SessionExpiredError, SessionNotFoundError
from domain.model.user import Session, User
from port.user_repository import UserRepository
from services.token_service import TokenIssuer
from utils.config import AuthSettings

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 24 * 60 * 60


def is_expired(expires_at: float, now: float | None = None) -> bool:
    """A session is expired once ``now`` reaches ``expires_at``."""
    if now is None:
        now = time.time()
    return expires_at <= now


class SessionManager:
    def __init__(
        self,
        repo: UserRepository,
        issuer: TokenIssuer,
        settings: AuthSettings,
        clock: Callable[[], float] = time.time,
    ):
        self._repo = repo
        self._issuer = issuer
        self._ttl_seconds = settings.refresh_token_ttl_days * SECONDS_PER_DAY
        self._max_sessions = settings.max_sessions_per_user
        self._clock = clock

    def create_session(self, user: User) -> str:
        """Create and persist a new session for ``user``; return its refresh token.

        Expired sessions are dropped and only the newest ``max_sessions``
        are kept. ``user.sessions`` is updated to mirror the stored list.

        Raises:
            TokenSigningError: no refresh token could be generated
            PersistenceError: the session could not be saved
        """
        now = self._clock()
        session = Session(
            token=self._issuer.generate_refresh_token(),
            expires_at=now + self._ttl_seconds,
        )

        previous = list(user.sessions)
        if not self._repo.add_session(user.id, session, self._max_sessions, now):
            raise PersistenceError("Failed to save session to database")

        kept = [s for s in previous if not s.is_expired(now)]
        kept.append(session)
        user.sessions = kept[-self._max_sessions:]

        logger.info("Session created", extra={"userId": user.id, "expiresAt": session.expires_at})
        return session.token

    def is_expired(self, expires_at: float) -> bool:
        return is_expired(expires_at, self._clock())

    def find_valid_session(self, user: User, token: str) -> Session | None:
        """Return the first session matching ``token`` exactly that has not expired."""
        now = self._clock()
        return next(
            (s for s in user.sessions if s.token == token and not is_expired(s.expires_at, now)),
            None,
        )

    def require_valid_session(self, user: User, token: str) -> Session:
        """Like ``find_valid_session``, but a missing match is an error.

        Raises:
            SessionExpiredError: every session carrying ``token`` has expired
        """
        session = self.find_valid_session(user, token)
        if session is None:
            raise SessionExpiredError("Refresh Token has expired or Session is invalid")
        return session

    def revoke_session(self, user_id: str, token: str) -> None:
        """Remove the session carrying ``token``.

        Raises:
            SessionNotFoundError: the user has no such session
        """
        if not self._repo.remove_session(user_id, token):
            raise SessionNotFoundError("Session not found")
        logger.info("Session revoked", extra={"userId": user_id})

    def revoke_all_sessions(self, user_id: str) -> int:
        count = self._repo.remove_all_sessions(user_id)
        logger.info("All sessions revoked", extra={"userId": user_id, "count": count})
        return count
