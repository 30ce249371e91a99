"""Unit tests for auth_service (credential store)."""

import unittest
from unittest.mock import patch

from adapter.fake.user_repository import FakeUserRepository
from domain.model.errors import (
    DuplicateError,
    InvalidCredentialsError,
    NotFoundError,
    PersistenceError,
    SessionNotFoundError,
    ValidationError,
)
from domain.model.user import Session
from services import auth_service

# Lowest allowed cost keeps the suite fast
ROUNDS = 10


class TestCreateUser(unittest.TestCase):

    def setUp(self):
        self.repo = FakeUserRepository()

    def test_create_user_success(self):
        user = auth_service.create_user(self.repo, 'a@b.com', '12345678', ROUNDS)

        self.assertEqual(user.email, 'a@b.com')
        self.assertIsNotNone(user.id)
        self.assertEqual(user.sessions, [])
        self.assertIs(self.repo.get_by_id(user.id), user)

    def test_password_is_hashed(self):
        user = auth_service.create_user(self.repo, 'a@b.com', '12345678', ROUNDS)

        self.assertNotEqual(user.password_hash, '12345678')
        self.assertTrue(user.password_hash.startswith('$2'))

    def test_email_is_trimmed_and_lowercased(self):
        user = auth_service.create_user(self.repo, '  A@B.com ', '12345678', ROUNDS)
        self.assertEqual(user.email, 'a@b.com')

    def test_empty_email_rejected(self):
        with self.assertRaises(ValidationError):
            auth_service.create_user(self.repo, '   ', '12345678', ROUNDS)

    def test_short_password_rejected_before_hashing(self):
        with patch('services.auth_service.hash_password') as mock_hash:
            with self.assertRaises(ValidationError):
                auth_service.create_user(self.repo, 'a@b.com', '1234567', ROUNDS)
            mock_hash.assert_not_called()

    def test_password_hashed_exactly_once(self):
        with patch('services.auth_service.hash_password', return_value='$2b$hash') as mock_hash:
            auth_service.create_user(self.repo, 'a@b.com', '12345678', ROUNDS)
        mock_hash.assert_called_once_with('12345678', ROUNDS)

    def test_duplicate_email_rejected(self):
        auth_service.create_user(self.repo, 'a@b.com', '12345678', ROUNDS)

        with self.assertRaises(DuplicateError):
            auth_service.create_user(self.repo, 'A@b.com', 'another-password', ROUNDS)

    def test_store_failure_raises_persistence_error(self):
        self.repo.fail_writes = True

        with self.assertRaises(PersistenceError):
            auth_service.create_user(self.repo, 'a@b.com', '12345678', ROUNDS)

    def test_same_password_gets_different_hashes(self):
        first = auth_service.create_user(self.repo, 'one@b.com', 'shared-password', ROUNDS)
        second = auth_service.create_user(self.repo, 'two@b.com', 'shared-password', ROUNDS)

        self.assertNotEqual(first.password_hash, second.password_hash)
        self.assertEqual(
            auth_service.verify_credentials(self.repo, 'one@b.com', 'shared-password', ROUNDS).id, first.id
        )
        self.assertEqual(
            auth_service.verify_credentials(self.repo, 'two@b.com', 'shared-password', ROUNDS).id, second.id
        )


class TestVerifyCredentials(unittest.TestCase):

    def setUp(self):
        self.repo = FakeUserRepository()
        self.user = auth_service.create_user(self.repo, 'a@b.com', '12345678', ROUNDS)

    def test_valid_credentials(self):
        user = auth_service.verify_credentials(self.repo, 'a@b.com', '12345678', ROUNDS)
        self.assertEqual(user.id, self.user.id)

    def test_updates_last_login(self):
        self.assertIsNone(self.user.last_login)
        auth_service.verify_credentials(self.repo, 'a@b.com', '12345678', ROUNDS)
        self.assertIsNotNone(self.user.last_login)

    def test_missing_user_and_wrong_password_are_indistinguishable(self):
        with self.assertRaises(InvalidCredentialsError) as missing:
            auth_service.verify_credentials(self.repo, 'nobody@b.com', '12345678', ROUNDS)
        with self.assertRaises(InvalidCredentialsError) as wrong:
            auth_service.verify_credentials(self.repo, 'a@b.com', 'wrong-password', ROUNDS)

        self.assertEqual(type(missing.exception), type(wrong.exception))
        self.assertEqual(str(missing.exception), str(wrong.exception))

    def test_missing_user_still_runs_hash_check(self):
        with patch('services.auth_service.verify_password', return_value=False) as mock_verify:
            with self.assertRaises(InvalidCredentialsError):
                auth_service.verify_credentials(self.repo, 'nobody@b.com', '12345678', ROUNDS)
        mock_verify.assert_called_once()

    def test_corrupt_stored_hash_is_invalid_credentials(self):
        self.user.password_hash = 'not-a-bcrypt-hash'
        with self.assertRaises(InvalidCredentialsError):
            auth_service.verify_credentials(self.repo, 'a@b.com', '12345678', ROUNDS)


class TestLookups(unittest.TestCase):

    def setUp(self):
        self.repo = FakeUserRepository()
        self.user = auth_service.create_user(self.repo, 'a@b.com', '12345678', ROUNDS)

    def test_find_by_email(self):
        self.assertIs(auth_service.find_by_email(self.repo, 'A@B.COM'), self.user)

    def test_find_by_email_missing(self):
        with self.assertRaises(NotFoundError):
            auth_service.find_by_email(self.repo, 'nobody@b.com')

    def test_find_by_id_and_session_token(self):
        self.user.sessions.append(Session(token='tok', expires_at=9e12))

        found = auth_service.find_by_id_and_session_token(self.repo, self.user.id, 'tok')
        self.assertIs(found, self.user)

    def test_find_by_id_and_unknown_token(self):
        self.user.sessions.append(Session(token='tok', expires_at=9e12))

        with self.assertRaises(SessionNotFoundError):
            auth_service.find_by_id_and_session_token(self.repo, self.user.id, 'other')

    def test_find_by_id_and_token_requires_both(self):
        with self.assertRaises(NotFoundError):
            auth_service.find_by_id_and_session_token(self.repo, None, 'tok')
        with self.assertRaises(NotFoundError):
            auth_service.find_by_id_and_session_token(self.repo, self.user.id, None)


if __name__ == '__main__':
    unittest.main()
