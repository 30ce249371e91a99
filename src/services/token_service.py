"""Token issuer: signed access tokens and opaque refresh tokens."""

import logging
import secrets
import time
import uuid
from typing import Callable

from jose import ExpiredSignatureError, JOSEError, JWTError, jwt

from domain.model.errors import InvalidTokenError, TokenExpiredError, TokenSigningError
from utils.config import AuthSettings

logger = logging.getLogger(__name__)

REFRESH_TOKEN_BYTES = 64


class TokenIssuer:
    """Mints and verifies tokens with an explicitly supplied secret.

    ``clock`` returns seconds since the epoch; tests pass a fixed clock to
    issue tokens in the past.
    """

    def __init__(self, settings: AuthSettings, clock: Callable[[], float] = time.time):
        self._secret = settings.jwt_secret_key
        self._algorithm = settings.jwt_algorithm
        self._ttl_seconds = settings.access_token_ttl_minutes * 60
        self._clock = clock

    def generate_access_token(self, user_id: str) -> str:
        """Create a JWT whose ``sub`` is the user id, valid for the configured TTL.

        Raises:
            TokenSigningError: the token could not be signed
        """
        issued_at = int(self._clock())
        payload = {
            "sub": user_id,
            "iat": issued_at,
            "exp": issued_at + self._ttl_seconds,
            # Two tokens for the same user in the same second still differ
            "jti": uuid.uuid4().hex,
        }
        try:
            return jwt.encode(payload, self._secret, algorithm=self._algorithm)
        except JOSEError as e:
            logger.error("Failed to sign access token", extra={"userId": user_id, "error": str(e)})
            raise TokenSigningError("Failed to sign access token") from e

    def verify_access_token(self, token: str | None) -> str:
        """Check signature and expiry together and return the user id.

        Raises:
            TokenExpiredError: the token's ``exp`` has passed
            InvalidTokenError: missing, malformed, or badly signed token
        """
        if not token:
            raise InvalidTokenError("Access token is missing")
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except ExpiredSignatureError as e:
            raise TokenExpiredError("Access token has expired") from e
        except JWTError as e:
            logger.debug(f"JWT verification failed: {e}")
            raise InvalidTokenError("Invalid access token") from e

        user_id = payload.get("sub")
        if not user_id:
            raise InvalidTokenError("Invalid access token")
        return user_id

    @staticmethod
    def generate_refresh_token() -> str:
        """64 bytes from the OS CSPRNG as 128 hex characters.

        Raises:
            TokenSigningError: the OS random source failed
        """
        try:
            return secrets.token_hex(REFRESH_TOKEN_BYTES)
        except OSError as e:
            logger.error("Failed to generate refresh token", extra={"error": str(e)})
            raise TokenSigningError("Failed to generate refresh token") from e
