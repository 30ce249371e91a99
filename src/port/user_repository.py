from typing import Protocol

from domain.model.user import Session, User


class UserRepository(Protocol):
    """Protocol defining the interface for user data access."""
    def create(self, email: str, password_hash: str) -> User | None:
        """Create a new user. Return User or None if creation failed."""
        ...

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        ...

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        ...

    def get_by_id_and_session_token(self, user_id: str, token: str) -> User | None:
        """Find a user by ID that holds a session with exactly this token."""
        ...

    def update_last_login(self, user_id: str) -> bool:
        """Update the last login timestamp for a user. Return True if successful."""
        ...

    def add_session(self, user_id: str, session: Session, max_sessions: int, now: float) -> bool:
        """Drop sessions expired at ``now``, then append ``session`` keeping the newest ``max_sessions``."""
        ...

    def remove_session(self, user_id: str, token: str) -> bool:
        """Remove the session with this token. Return True if one was removed."""
        ...

    def remove_all_sessions(self, user_id: str) -> int:
        """Remove every session of the user. Return how many were removed."""
        ...
