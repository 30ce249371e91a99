"""Tests for the JSON log formatter."""

import json
import logging
import unittest

from utils.logging import JSONFormatter, REDACTED


def _record(msg: str, **extra) -> logging.LogRecord:
    record = logging.LogRecord('test', logging.INFO, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter(unittest.TestCase):

    def setUp(self):
        self.formatter = JSONFormatter()

    def test_basic_fields(self):
        data = json.loads(self.formatter.format(_record('hello')))

        self.assertEqual(data['message'], 'hello')
        self.assertEqual(data['level'], 'INFO')
        self.assertEqual(data['logger'], 'test')
        self.assertTrue(data['timestamp'].endswith('Z'))

    def test_extra_fields_included(self):
        data = json.loads(self.formatter.format(_record('created', userId='u-1')))
        self.assertEqual(data['userId'], 'u-1')

    def test_token_fields_redacted(self):
        data = json.loads(self.formatter.format(_record('x', refresh_token='abc', password='pw')))

        self.assertEqual(data['refresh_token'], REDACTED)
        self.assertEqual(data['password'], REDACTED)


if __name__ == '__main__':
    unittest.main()
