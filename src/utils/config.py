"""Environment-backed configuration.

Values are read once at startup (after ``load_dotenv()``) and passed
explicitly to the services that need them.
"""

import os
from dataclasses import dataclass

DEFAULT_ACCESS_TOKEN_TTL_MINUTES = 15
DEFAULT_REFRESH_TOKEN_TTL_DAYS = 10
DEFAULT_MAX_SESSIONS_PER_USER = 10
DEFAULT_BCRYPT_ROUNDS = 12
MIN_BCRYPT_ROUNDS = 10


@dataclass(frozen=True)
class AuthSettings:
    """Settings for token issuance, sessions, and password hashing."""
    jwt_secret_key: str
    jwt_algorithm: str = "HS256"
    access_token_ttl_minutes: int = DEFAULT_ACCESS_TOKEN_TTL_MINUTES
    refresh_token_ttl_days: int = DEFAULT_REFRESH_TOKEN_TTL_DAYS
    max_sessions_per_user: int = DEFAULT_MAX_SESSIONS_PER_USER
    bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS

    def __post_init__(self):
        if not self.jwt_secret_key:
            raise ValueError("jwt_secret_key must not be empty")
        if self.bcrypt_rounds < MIN_BCRYPT_ROUNDS:
            raise ValueError(f"bcrypt_rounds must be at least {MIN_BCRYPT_ROUNDS}")
        if self.max_sessions_per_user < 1:
            raise ValueError("max_sessions_per_user must be at least 1")


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def load_auth_settings() -> AuthSettings:
    """Build AuthSettings from environment variables.

    Raises:
        ValueError: JWT_SECRET_KEY is missing or a numeric setting is invalid
    """
    secret = os.getenv("JWT_SECRET_KEY")
    if not secret:
        raise ValueError(
            "JWT_SECRET_KEY environment variable is required. "
            "Generate a secure key with: openssl rand -hex 32"
        )
    return AuthSettings(
        jwt_secret_key=secret,
        jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
        access_token_ttl_minutes=_int_env("ACCESS_TOKEN_TTL_MINUTES", DEFAULT_ACCESS_TOKEN_TTL_MINUTES),
        refresh_token_ttl_days=_int_env("REFRESH_TOKEN_TTL_DAYS", DEFAULT_REFRESH_TOKEN_TTL_DAYS),
        max_sessions_per_user=_int_env("MAX_SESSIONS_PER_USER", DEFAULT_MAX_SESSIONS_PER_USER),
        bcrypt_rounds=_int_env("BCRYPT_ROUNDS", DEFAULT_BCRYPT_ROUNDS),
    )
