"""CLI: python -m app.scripts.create_user."""

import unittest
from unittest.mock import patch

from app.core.config import settings
from app.core.security import stored_credential
from app.models import User
from app.scripts.create_user import main
from app.services.auth import authenticate
from tests.utils import DbTestCase


class TestCreateUser(DbTestCase):
    def setUp(self) -> None:
        super().setUp()
        session = patch("app.scripts.create_user.SessionLocal", self.Session)
        session.start()
        self.addCleanup(session.stop)

    def _user(self, username: str) -> User | None:
        with self.Session() as db:
            return db.query(User).filter(User.username == username).first()

    def test_creates_hashed_admin_that_can_log_in(self) -> None:
        self.assertEqual(main(["owner", "Owner@Example.com", "owner-password", "admin"]), 0)
        user = self._user("owner")
        self.assertEqual(user.role, "admin")
        self.assertEqual(user.email, "owner@example.com")
        self.assertEqual(stored_credential(user.password_hash).kind, "hashed")
        with self.Session() as db:
            result = authenticate(db, "owner", "owner-password", settings)
        self.assertTrue(result.user.is_admin)

    def test_default_role_is_user(self) -> None:
        self.assertEqual(main(["reader", "reader@example.com", "reader-password"]), 0)
        self.assertEqual(self._user("reader").role, "user")

    def test_existing_user_needs_update_flag(self) -> None:
        self.add_user("owner", "old-password", email="owner@example.com", is_active=False)
        self.assertEqual(main(["owner", "owner@example.com", "new-password", "admin"]), 1)
        self.assertEqual(
            main(["owner", "owner@example.com", "new-password", "admin", "--update"]), 0
        )
        user = self._user("owner")
        self.assertEqual(user.role, "admin")
        self.assertTrue(user.is_active)
        self.assertTrue(stored_credential(user.password_hash).verify("new-password"))

    def test_rejects_bad_input(self) -> None:
        self.assertEqual(main(["ab", "ab@example.com", "long-enough"]), 1)
        self.assertEqual(main(["abc", "no-at-sign", "long-enough"]), 1)
        self.assertEqual(main(["abc", "abc@example.com", "short"]), 1)


if __name__ == "__main__":
    unittest.main()
