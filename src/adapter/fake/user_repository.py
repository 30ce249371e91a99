"""In-memory implementation of UserRepository for testing."""

import uuid
from datetime import datetime, timezone
from domain.model.user import Session, User


class FakeUserRepository:
    def __init__(self):
        self.store: dict[str, User] = {}
        # Flip to simulate a store that rejects writes
        self.fail_writes = False

    # ── write operations ─────────────────────────────────────

    def create(self, email: str, password_hash: str) -> User | None:
        if self.fail_writes or any(u.email == email for u in self.store.values()):
            return None

        user_id = uuid.uuid4().hex
        now = datetime.now(timezone.utc)

        user = User(
            id=user_id,
            email=email,
            created_at=now,
            updated_at=now,
            password_hash=password_hash,
        )
        self.store[user_id] = user
        return user

    def update_last_login(self, user_id: str) -> bool:
        user = self.store.get(user_id)
        if not user or self.fail_writes:
            return False

        now = datetime.now(timezone.utc)
        user.last_login = now
        user.updated_at = now
        return True

    def add_session(self, user_id: str, session: Session, max_sessions: int, now: float) -> bool:
        user = self.store.get(user_id)
        if not user or self.fail_writes:
            return False

        kept = [s for s in user.sessions if not s.is_expired(now)]
        kept.append(session)
        user.sessions = kept[-max_sessions:]
        return True

    def remove_session(self, user_id: str, token: str) -> bool:
        user = self.store.get(user_id)
        if not user:
            return False

        remaining = [s for s in user.sessions if s.token != token]
        removed = len(remaining) != len(user.sessions)
        user.sessions = remaining
        return removed

    def remove_all_sessions(self, user_id: str) -> int:
        user = self.store.get(user_id)
        if not user:
            return 0

        count = len(user.sessions)
        user.sessions = []
        return count

    # ── read operations ──────────────────────────────────────

    def get_by_email(self, email: str) -> User | None:
        for user in self.store.values():
            if user.email == email:
                return user
        return None

    def get_by_id(self, user_id: str) -> User | None:
        return self.store.get(user_id)

    def get_by_id_and_session_token(self, user_id: str, token: str) -> User | None:
        user = self.store.get(user_id)
        if user and user.find_session(token):
            return user
        return None
