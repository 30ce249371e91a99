"""Tests for the cached MongoDB client and its reconnection rules."""

import unittest
from unittest.mock import MagicMock, patch

from pymongo.errors import ConnectionFailure, PyMongoError

from adapter.mongodb import connection
from adapter.mongodb.connection import get_mongodb_client, reset_client


def _client(ping_error: Exception | None = None) -> MagicMock:
    client = MagicMock()
    if ping_error:
        client.admin.command.side_effect = ping_error
    return client


class TestGetMongoDBClient(unittest.TestCase):

    def setUp(self):
        reset_client()

    def tearDown(self):
        reset_client()

    @patch('adapter.mongodb.connection.MongoClient')
    def test_connects_and_caches(self, mock_client_cls):
        client = _client()
        mock_client_cls.return_value = client

        self.assertIs(get_mongodb_client(), client)
        self.assertIs(get_mongodb_client(), client)

        mock_client_cls.assert_called_once()
        self.assertEqual(mock_client_cls.call_args.kwargs['serverSelectionTimeoutMS'], 5000)

    @patch('adapter.mongodb.connection.MongoClient')
    def test_reconnects_when_cached_client_fails_ping(self, mock_client_cls):
        first, second = _client(), _client()
        mock_client_cls.side_effect = [first, second]

        self.assertIs(get_mongodb_client(), first)
        first.admin.command.side_effect = PyMongoError('connection reset')

        self.assertIs(get_mongodb_client(), second)
        self.assertEqual(mock_client_cls.call_count, 2)

    @patch('adapter.mongodb.connection.MongoClient')
    def test_initial_failure_is_not_retried(self, mock_client_cls):
        mock_client_cls.return_value = _client(ConnectionFailure('refused'))

        self.assertIsNone(get_mongodb_client())
        self.assertIsNone(get_mongodb_client())

        mock_client_cls.assert_called_once()
        self.assertTrue(connection._connection_failed)

    @patch('adapter.mongodb.connection.MongoClient')
    def test_failure_after_success_is_retried(self, mock_client_cls):
        first = _client()
        down = _client(ConnectionFailure('refused'))
        back = _client()
        mock_client_cls.side_effect = [first, down, back]

        self.assertIs(get_mongodb_client(), first)
        first.admin.command.side_effect = PyMongoError('connection reset')

        self.assertIsNone(get_mongodb_client())
        self.assertFalse(connection._connection_failed)
        self.assertIs(get_mongodb_client(), back)

    @patch('adapter.mongodb.connection.MongoClient')
    def test_reset_allows_retry_after_initial_failure(self, mock_client_cls):
        client = _client()
        mock_client_cls.side_effect = [_client(ConnectionFailure('refused')), client]

        self.assertIsNone(get_mongodb_client())
        reset_client()

        self.assertIs(get_mongodb_client(), client)


if __name__ == '__main__':
    unittest.main()
