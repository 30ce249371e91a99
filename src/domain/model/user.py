import time
from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class Session:
    """A refresh-token session embedded in a User document."""
    token: str
    expires_at: float

    def is_expired(self, now: float | None = None) -> bool:
        """Expired once ``now`` reaches ``expires_at`` (equality counts)."""
        if now is None:
            now = time.time()
        return self.expires_at <= now

    def to_document(self) -> dict:
        return {'token': self.token, 'expires_at': self.expires_at}

    @staticmethod
    def from_document(doc: dict) -> 'Session':
        return Session(token=doc['token'], expires_at=float(doc['expires_at']))


@dataclass
class User:
    """Domain model representing a user."""
    id: str
    email: str
    created_at: datetime
    updated_at: datetime
    last_login: datetime | None = None
    password_hash: str | None = None
    sessions: list[Session] = field(default_factory=list)

    def find_session(self, token: str) -> Session | None:
        """Return the first session whose token equals ``token``."""
        for session in self.sessions:
            if session.token == token:
                return session
        return None
