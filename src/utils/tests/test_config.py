"""Tests for environment-backed auth settings."""

import os
import unittest
from unittest.mock import patch

from utils.config import AuthSettings, load_auth_settings


class TestLoadAuthSettings(unittest.TestCase):

    @patch.dict(os.environ, {}, clear=True)
    def test_missing_secret_raises(self):
        with self.assertRaises(ValueError) as ctx:
            load_auth_settings()
        self.assertIn("JWT_SECRET_KEY", str(ctx.exception))

    @patch.dict(os.environ, {"JWT_SECRET_KEY": "secret"}, clear=True)
    def test_defaults(self):
        settings = load_auth_settings()

        self.assertEqual(settings.jwt_secret_key, "secret")
        self.assertEqual(settings.jwt_algorithm, "HS256")
        self.assertEqual(settings.access_token_ttl_minutes, 15)
        self.assertEqual(settings.refresh_token_ttl_days, 10)
        self.assertEqual(settings.max_sessions_per_user, 10)
        self.assertEqual(settings.bcrypt_rounds, 12)

    @patch.dict(os.environ, {
        "JWT_SECRET_KEY": "secret",
        "MAX_SESSIONS_PER_USER": "3",
        "BCRYPT_ROUNDS": "11",
    }, clear=True)
    def test_overrides(self):
        settings = load_auth_settings()
        self.assertEqual(settings.max_sessions_per_user, 3)
        self.assertEqual(settings.bcrypt_rounds, 11)

    @patch.dict(os.environ, {"JWT_SECRET_KEY": "secret", "BCRYPT_ROUNDS": "lots"}, clear=True)
    def test_non_integer_raises(self):
        with self.assertRaises(ValueError):
            load_auth_settings()


class TestAuthSettings(unittest.TestCase):

    def test_cost_factor_below_ten_rejected(self):
        with self.assertRaises(ValueError):
            AuthSettings(jwt_secret_key="secret", bcrypt_rounds=9)

    def test_session_cap_must_be_positive(self):
        with self.assertRaises(ValueError):
            AuthSettings(jwt_secret_key="secret", max_sessions_per_user=0)


if __name__ == '__main__':
    unittest.main()
