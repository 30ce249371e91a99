"""Unit tests for FakeUserRepository — verifies Port contract compliance."""

import unittest

from adapter.fake.user_repository import FakeUserRepository
from domain.model.user import Session, User


class TestFakeUserRepository(unittest.TestCase):

    def setUp(self):
        self.repo = FakeUserRepository()
        self.user = self.repo.create(email='a@b.com', password_hash='$2b$hash')

    # ── create ────────────────────────────────────────────────

    def test_create_returns_user(self):
        self.assertIsInstance(self.user, User)
        self.assertEqual(self.repo.get_by_email('a@b.com'), self.user)

    def test_create_duplicate_email_returns_none(self):
        self.assertIsNone(self.repo.create(email='a@b.com', password_hash='x'))

    # ── sessions ──────────────────────────────────────────────

    def test_add_session_prunes_expired_and_caps(self):
        self.user.sessions = [Session('expired', 5.0), Session('a', 50.0), Session('b', 50.0)]

        self.assertTrue(self.repo.add_session(self.user.id, Session('c', 50.0), max_sessions=2, now=10.0))

        self.assertEqual([s.token for s in self.user.sessions], ['b', 'c'])

    def test_add_session_unknown_user(self):
        self.assertFalse(self.repo.add_session('missing', Session('c', 50.0), max_sessions=2, now=10.0))

    def test_get_by_id_and_session_token(self):
        self.repo.add_session(self.user.id, Session('tok', 50.0), max_sessions=5, now=0.0)

        self.assertEqual(self.repo.get_by_id_and_session_token(self.user.id, 'tok'), self.user)
        self.assertIsNone(self.repo.get_by_id_and_session_token(self.user.id, 'other'))
        self.assertIsNone(self.repo.get_by_id_and_session_token('missing', 'tok'))

    def test_remove_session(self):
        self.repo.add_session(self.user.id, Session('tok', 50.0), max_sessions=5, now=0.0)

        self.assertTrue(self.repo.remove_session(self.user.id, 'tok'))
        self.assertFalse(self.repo.remove_session(self.user.id, 'tok'))


if __name__ == '__main__':
    unittest.main()
