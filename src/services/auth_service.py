"""Auth service — credential storage and verification.

Pure business logic with no HTTP dependencies.
Raises domain errors that route handlers map to HTTP status codes.
"""

import logging
from functools import lru_cache

import bcrypt

from domain.model.errors import (
    DuplicateError,
    InvalidCredentialsError,
    NotFoundError,
    PersistenceError,
    SessionNotFoundError,
    ValidationError,
)
from domain.model.user import User
from port.user_repository import UserRepository
from utils.config import DEFAULT_BCRYPT_ROUNDS

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


def hash_password(password: str, rounds: int = DEFAULT_BCRYPT_ROUNDS) -> str:
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


@lru_cache(maxsize=None)
def _dummy_hash(rounds: int) -> str:
    return hash_password("not-a-real-password", rounds)


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def _validate_credentials(email: str, password: str | None) -> None:
    if not email:
        raise ValidationError("Email is required")
    if password is None or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")


def create_user(
    repo: UserRepository,
    email: str,
    password: str,
    rounds: int = DEFAULT_BCRYPT_ROUNDS,
) -> User:
    """Register a new user.

    The password is validated before hashing and hashed exactly once with a
    fresh salt, so two users with the same password get different hashes.

    Raises:
        ValidationError: empty email or password too short
        DuplicateError: email already registered
        PersistenceError: the store refused the insert
    """
    email = normalize_email(email)
    _validate_credentials(email, password)

    if repo.get_by_email(email):
        raise DuplicateError("Email already registered")

    user = repo.create(email=email, password_hash=hash_password(password, rounds))
    if not user:
        # Lost a race against a concurrent signup with the same email
        if repo.get_by_email(email):
            raise DuplicateError("Email already registered")
        raise PersistenceError("Failed to create user")

    logger.info("User registered", extra={"userId": user.id})
    return user


def find_by_email(repo: UserRepository, email: str) -> User:
    user = repo.get_by_email(normalize_email(email))
    if not user:
        raise NotFoundError("User not found")
    return user


def find_by_id_and_session_token(repo: UserRepository, user_id: str, token: str) -> User:
    """Return the user only if one of its sessions carries exactly ``token``.

    Raises:
        SessionNotFoundError: no such user, or the token is not among its sessions
    """
    if not user_id or not token:
        raise SessionNotFoundError("User not found")
    user = repo.get_by_id_and_session_token(user_id, token)
    if not user:
        raise SessionNotFoundError("User not found")
    return user


def verify_credentials(
    repo: UserRepository,
    email: str,
    password: str,
    rounds: int = DEFAULT_BCRYPT_ROUNDS,
) -> User:
    """Authenticate a user by email and password.

    An unknown email still pays for a bcrypt comparison, so the response
    (error and timing) is the same as for a wrong password.

    Raises:
        InvalidCredentialsError: unknown email or wrong password
    """
    user = repo.get_by_email(normalize_email(email))
    if not user or not user.password_hash:
        verify_password(password or "", _dummy_hash(rounds))
        raise InvalidCredentialsError()

    if not verify_password(password or "", user.password_hash):
        raise InvalidCredentialsError()

    # Login succeeds even if the timestamp update fails
    repo.update_last_login(user.id)
    return user
