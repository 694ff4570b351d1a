"""
Settings URL handling and the engine options derived from it.
Run from the repository root: python -m pytest tests/test_config.py -v
"""
import unittest
from unittest.mock import patch

import database
from config import Settings


class TestDatabaseSettings(unittest.TestCase):
    def test_postgres_url_uses_async_driver(self):
        s = Settings(database_url="postgres://user:pw@db.example.com/enroll")
        self.assertEqual(s.database_url, "postgresql+asyncpg://user:pw@db.example.com/enroll")
        self.assertTrue(s.is_postgresql)
        self.assertFalse(s.is_sqlite)

    def test_sqlite_engine_options(self):
        with patch.object(database, "settings", Settings(database_url="sqlite+aiosqlite:///./x.db")):
            kwargs = database._get_engine_kwargs()
        self.assertEqual(kwargs["connect_args"], {"check_same_thread": False})
        self.assertNotIn("pool_pre_ping", kwargs)

    def test_postgres_without_ssl_sends_no_tls_args(self):
        s = Settings(database_url="postgresql://u:p@localhost/enroll", database_ssl=False)
        with patch.object(database, "settings", s):
            kwargs = database._get_engine_kwargs()
        self.assertTrue(kwargs["pool_pre_ping"])
        self.assertNotIn("connect_args", kwargs)

    def test_postgres_with_ssl_requires_tls(self):
        s = Settings(database_url="postgresql://u:p@render.example.com/enroll", database_ssl=True)
        with patch.object(database, "settings", s):
            kwargs = database._get_engine_kwargs()
        self.assertEqual(kwargs["connect_args"], {"ssl": "require"})


if __name__ == "__main__":
    unittest.main()
