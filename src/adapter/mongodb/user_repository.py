"""MongoDB implementation of UserRepository."""

import uuid
from datetime import datetime, timezone
from logging import getLogger
from pymongo import ReturnDocument
from pymongo.database import Database
from pymongo.errors import PyMongoError
from adapter.mongodb import USERS_COLLECTION_NAME
from domain.model.user import Session, User

logger = getLogger(__name__)


class MongoUserRepository:
    def __init__(self, db: Database):
        self.collection = db[USERS_COLLECTION_NAME]

    def ensure_indexes(self) -> bool:
        """Create indexes for users collection."""
        from adapter.mongodb.indexes import create_index_safe

        return all([
            create_index_safe(self.collection, [('email', 1)], 'idx_users_email', unique=True),
            create_index_safe(self.collection, [('sessions.token', 1)], 'idx_users_session_token'),
        ])

    def _to_domain(self, doc: dict) -> User:
        """Convert MongoDB document to User domain model."""
        return User(
            id=doc['_id'],
            email=doc['email'],
            created_at=doc['created_at'],
            updated_at=doc['updated_at'],
            last_login=doc.get('last_login'),
            password_hash=doc.get('password_hash'),
            sessions=[Session.from_document(s) for s in doc.get('sessions', [])],
        )

    def create(self, email: str, password_hash: str) -> User | None:
        """Create a new user and return the User object."""
        try:
            user_id = uuid.uuid4().hex
            now = datetime.now(timezone.utc)
            user_doc = {
                '_id': user_id,
                'email': email,
                'password_hash': password_hash,
                'sessions': [],
                'created_at': now,
                'updated_at': now,
            }
            self.collection.insert_one(user_doc)

            logger.info("User created", extra={"userId": user_id})
            return self._to_domain(user_doc)
        except PyMongoError as e:
            error_str = str(e)
            if 'duplicate key' in error_str.lower() or 'E11000' in error_str:
                logger.warning("User creation failed: email already exists")
            else:
                logger.error("Failed to create user", extra={"error": error_str})
            return None

    def get_by_email(self, email: str) -> User | None:
        """Find a user by email. Return User or None if not found."""
        try:
            doc = self.collection.find_one({'email': email})
            return self._to_domain(doc) if doc else None
        except PyMongoError as e:
            logger.error("Failed to get user by email", extra={"error": str(e)})
            return None

    def get_by_id(self, user_id: str) -> User | None:
        """Find a user by ID. Return User or None if not found."""
        try:
            doc = self.collection.find_one({'_id': user_id})
            return self._to_domain(doc) if doc else None
        except PyMongoError as e:
            logger.error("Failed to get user by ID", extra={"userId": user_id, "error": str(e)})
            return None

    def get_by_id_and_session_token(self, user_id: str, token: str) -> User | None:
        """Find a user by ID whose session list contains this exact token."""
        try:
            doc = self.collection.find_one({'_id': user_id, 'sessions.token': token})
            return self._to_domain(doc) if doc else None
        except PyMongoError as e:
            logger.error("Failed to get user by session token", extra={"userId": user_id, "error": str(e)})
            return None

    def update_last_login(self, user_id: str) -> bool:
        """Update the last login timestamp for a user. Return True if successful."""
        try:
            now = datetime.now(timezone.utc)
            result = self.collection.update_one(
                {'_id': user_id},
                {'$set': {'last_login': now, 'updated_at': now}}
            )
            if result.modified_count > 0:
                logger.debug("Updated last_login", extra={"userId": user_id})
                return True
            return False
        except PyMongoError as e:
            logger.error("Failed to update last_login", extra={"userId": user_id, "error": str(e)})
            return False

    def add_session(self, user_id: str, session: Session, max_sessions: int, now: float) -> bool:
        """Prune expired sessions, then atomically append the new one.

        ``$push`` with ``$slice`` keeps concurrent logins from overwriting each
        other's sessions and caps the list at the newest ``max_sessions``.
        """
        try:
            self.collection.update_one(
                {'_id': user_id},
                {'$pull': {'sessions': {'expires_at': {'$lte': now}}}}
            )
            result = self.collection.update_one(
                {'_id': user_id},
                {
                    '$push': {'sessions': {'$each': [session.to_document()], '$slice': -max_sessions}},
                    '$set': {'updated_at': datetime.now(timezone.utc)},
                }
            )
            return result.matched_count > 0
        except PyMongoError as e:
            logger.error("Failed to save session", extra={"userId": user_id, "error": str(e)})
            return False

    def remove_session(self, user_id: str, token: str) -> bool:
        try:
            result = self.collection.update_one(
                {'_id': user_id},
                {'$pull': {'sessions': {'token': token}}}
            )
            return result.modified_count > 0
        except PyMongoError as e:
            logger.error("Failed to remove session", extra={"userId": user_id, "error": str(e)})
            return False

    def remove_all_sessions(self, user_id: str) -> int:
        try:
            before = self.collection.find_one_and_update(
                {'_id': user_id},
                {'$set': {'sessions': []}},
                projection={'sessions': 1},
                return_document=ReturnDocument.BEFORE,
            )
            return len(before.get('sessions', [])) if before else 0
        except PyMongoError as e:
            logger.error("Failed to remove sessions", extra={"userId": user_id, "error": str(e)})
            return 0
