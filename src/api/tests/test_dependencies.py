"""Unit tests for API dependency wiring."""

import unittest
from unittest.mock import patch, MagicMock

from fastapi import HTTPException

from api.dependencies import get_session_manager, get_token_issuer, get_user_repo
from adapter.mongodb.user_repository import MongoUserRepository
from services.session_service import SessionManager
from services.token_service import TokenIssuer
from utils.config import AuthSettings


class TestGetUserRepo(unittest.TestCase):

    @patch('api.dependencies.get_mongodb_client')
    def test_returns_mongo_repository_when_connected(self, mock_get_client):
        mock_client = MagicMock()
        mock_client.__getitem__.return_value = MagicMock()
        mock_get_client.return_value = mock_client

        self.assertIsInstance(get_user_repo(), MongoUserRepository)

    @patch('api.dependencies.get_mongodb_client')
    def test_raises_503_when_mongodb_unavailable(self, mock_get_client):
        mock_get_client.return_value = None

        with self.assertRaises(HTTPException) as context:
            get_user_repo()

        self.assertEqual(context.exception.status_code, 503)
        self.assertEqual(context.exception.detail, "Database unavailable")

    @patch('api.dependencies.get_mongodb_client')
    def test_uses_configured_database_name(self, mock_get_client):
        mock_client = MagicMock()
        mock_get_client.return_value = mock_client

        get_user_repo()

        from api.dependencies import DATABASE_NAME
        mock_client.__getitem__.assert_called_with(DATABASE_NAME)


class TestAuthWiring(unittest.TestCase):

    def test_issuer_and_session_manager_share_settings(self):
        settings = AuthSettings(jwt_secret_key='s', bcrypt_rounds=10)
        issuer = get_token_issuer(settings)

        manager = get_session_manager(repo=MagicMock(), issuer=issuer, settings=settings)

        self.assertIsInstance(issuer, TokenIssuer)
        self.assertIsInstance(manager, SessionManager)


if __name__ == '__main__':
    unittest.main()
