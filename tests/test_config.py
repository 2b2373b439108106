"""Settings validation: bad values fail fast at startup."""

import unittest

from pydantic import SecretStr, ValidationError

from app.core.config import Settings


class TestSettingsDefaults(unittest.TestCase):
    def test_defaults(self) -> None:
        s = Settings(_env_file=None)
        self.assertEqual(s.API_PREFIX, "/api")
        self.assertEqual(s.JWT_EXPIRE_MINUTES, 60)
        self.assertEqual(s.RATE_LIMIT_WINDOW_SEC, 900)
        self.assertEqual(s.RATE_LIMIT_MAX_REQUESTS, 100)

    def test_rate_limit_string(self) -> None:
        s = Settings(_env_file=None, RATE_LIMIT_MAX_REQUESTS=5, RATE_LIMIT_WINDOW_SEC=60)
        self.assertEqual(s.rate_limit, "5 per 60 second")

    def test_cors_origins_are_split(self) -> None:
        s = Settings(_env_file=None, CORS_ORIGINS=" https://a.example , ,https://b.example")
        self.assertEqual(s.cors_origins, ["https://a.example", "https://b.example"])


class TestSettingsValidation(unittest.TestCase):
    def test_database_url_scheme(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(_env_file=None, DATABASE_URL="mysql://root@localhost/estates")
        self.assertEqual(
            Settings(_env_file=None, DATABASE_URL=" sqlite:///./dev.db ").DATABASE_URL,
            "sqlite:///./dev.db",
        )

    def test_empty_secrets_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            Settings(_env_file=None, JWT_SECRET=SecretStr("  "))
        with self.assertRaises(ValidationError):
            Settings(_env_file=None, ADMIN_PASSWORD=SecretStr(""))

    def test_bounds(self) -> None:
        bad = {
            "JWT_EXPIRE_MINUTES": 0,
            "RATE_LIMIT_WINDOW_SEC": 0,
            "RATE_LIMIT_MAX_REQUESTS": 0,
            "DB_POOL_SIZE": 0,
            "DB_CONNECT_TIMEOUT_SEC": 0,
            "MAX_UPLOAD_BYTES": 0,
        }
        for key, value in bad.items():
            with self.subTest(key=key):
                with self.assertRaises(ValidationError):
                    Settings(_env_file=None, **{key: value})

    def test_api_prefix_normalized(self) -> None:
        self.assertEqual(Settings(_env_file=None, API_PREFIX="/api/").API_PREFIX, "/api")
        with self.assertRaises(ValidationError):
            Settings(_env_file=None, API_PREFIX="api")

    def test_log_level(self) -> None:
        self.assertEqual(Settings(_env_file=None, LOG_LEVEL="debug").LOG_LEVEL, "DEBUG")
        with self.assertRaises(ValidationError):
            Settings(_env_file=None, LOG_LEVEL="loud")


if __name__ == "__main__":
    unittest.main()
