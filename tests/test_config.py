"""Unit tests for gatekeep.core.config: settings validation."""

import unittest

from pydantic import SecretStr, ValidationError

from gatekeep.core.config import Settings


class TestDatabaseUrls(unittest.TestCase):
    def test_accepts_postgres_and_sqlite(self) -> None:
        for url in ("postgresql+psycopg2://u:p@h:5432/db", "postgres://h/db", "sqlite://"):
            with self.subTest(url=url):
                self.assertEqual(Settings(DATABASE_URL=url).DATABASE_URL, url)

    def test_rejects_other_schemes(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(DATABASE_URL="mysql://u:p@h/db")

    def test_blank_read_url_means_none(self) -> None:
        self.assertIsNone(Settings(DATABASE_READ_URL="  ").DATABASE_READ_URL)


class TestSecretAndLogging(unittest.TestCase):
    def test_empty_secret_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(JWT_SECRET=SecretStr("   "))

    def test_log_level_normalised(self) -> None:
        self.assertEqual(Settings(LOG_LEVEL="debug").LOG_LEVEL, "DEBUG")
        with self.assertRaises(ValidationError):
            Settings(LOG_LEVEL="loud")


if __name__ == "__main__":
    unittest.main()
