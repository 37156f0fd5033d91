import unittest
from unittest.mock import patch

from screenhound.config import Settings
from screenhound.db import InMemoryDbClient, PostgresDbClient
from screenhound.dependencies import build_db_client
from screenhound.supabase_db import SupabaseDbClient


class BuildDbClientTests(unittest.TestCase):
    def test_in_memory_toggle_wins(self):
        settings = Settings(
            use_in_memory_backends=True, database_url="sqlite+pysqlite:///:memory:"
        )
        self.assertIsInstance(build_db_client(settings), InMemoryDbClient)

    def test_falls_back_to_in_memory(self):
        settings = Settings(
            use_in_memory_backends=False,
            database_url=None,
            supabase_url=None,
            supabase_key=None,
        )
        self.assertIsInstance(build_db_client(settings), InMemoryDbClient)

    def test_database_url_uses_sqlalchemy(self):
        settings = Settings(
            use_in_memory_backends=False,
            database_url="sqlite+pysqlite:///:memory:",
            supabase_url=None,
            supabase_key=None,
        )
        self.assertIsInstance(build_db_client(settings), PostgresDbClient)

    @patch("screenhound.supabase_db.create_client")
    def test_supabase_credentials_use_supabase(self, mock_create_client):
        settings = Settings(
            use_in_memory_backends=False,
            supabase_url="https://project.supabase.co",
            supabase_key="service-key",
        )
        db = build_db_client(settings)
        self.assertIsInstance(db, SupabaseDbClient)
        mock_create_client.assert_called_once_with(
            supabase_url="https://project.supabase.co", supabase_key="service-key"
        )


if __name__ == "__main__":
    unittest.main()
