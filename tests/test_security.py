"""Unit tests for app.core.security: token codec and stored password credentials."""

import unittest
from datetime import UTC, datetime, timedelta
from unittest.mock import patch

import jwt

from app.core.config import settings
from app.core.security import (
    HashedPassword,
    PlaintextPassword,
    create_access_token,
    decode_access_token,
    hash_password,
    stored_credential,
)
from app.schemas.auth import Principal

SECRET = "unit-test-secret"


class TestTokenRoundTrip(unittest.TestCase):
    """decode(create(p)) returns p for every valid principal."""

    def test_user_and_admin_round_trip(self) -> None:
        for subject_id, role in [(0, "admin"), (1, "user"), (42, "admin"), (987654, "user")]:
            with self.subTest(subject_id=subject_id, role=role):
                token = create_access_token(subject_id, role, secret=SECRET)
                self.assertEqual(
                    decode_access_token(token, secret=SECRET),
                    Principal(id=subject_id, role=role),
                )

    def test_default_secret_from_settings(self) -> None:
        token = create_access_token(3, "user")
        self.assertEqual(decode_access_token(token), Principal(id=3, role="user"))

    def test_payload_shape(self) -> None:
        token = create_access_token(5, "user", secret=SECRET)
        payload = jwt.decode(token, SECRET, algorithms=[settings.JWT_ALGORITHM])
        self.assertEqual(payload["id"], 5)
        self.assertEqual(payload["role"], "user")
        self.assertIn("iat", payload)
        self.assertIn("exp", payload)

    def test_default_expiry_uses_settings(self) -> None:
        token = create_access_token(5, "user", secret=SECRET)
        payload = jwt.decode(token, SECRET, algorithms=[settings.JWT_ALGORITHM])
        self.assertEqual(payload["exp"] - payload["iat"], settings.JWT_EXPIRE_MINUTES * 60)


class TestTokenRejection(unittest.TestCase):
    """Every decode failure yields None, whatever the cause."""

    def test_wrong_secret(self) -> None:
        token = create_access_token(1, "admin", secret=SECRET)
        self.assertIsNone(decode_access_token(token, secret="another-secret"))

    def test_zero_ttl_is_expired_immediately(self) -> None:
        token = create_access_token(1, "user", secret=SECRET, expires_delta=timedelta(0))
        self.assertIsNone(decode_access_token(token, secret=SECRET))

    def test_expired(self) -> None:
        token = create_access_token(1, "user", secret=SECRET, expires_delta=timedelta(seconds=-30))
        self.assertIsNone(decode_access_token(token, secret=SECRET))

    def test_malformed(self) -> None:
        for token in ["", "not-a-jwt", "a.b.c", "Bearer x"]:
            with self.subTest(token=token):
                self.assertIsNone(decode_access_token(token, secret=SECRET))

    def test_payload_swapped_under_original_signature(self) -> None:
        header, _, signature = create_access_token(1, "user", secret=SECRET).split(".")
        _, admin_payload, _ = create_access_token(1, "admin", secret="attacker").split(".")
        forged = ".".join([header, admin_payload, signature])
        self.assertIsNone(decode_access_token(forged, secret=SECRET))

    def _encode(self, payload: dict) -> str:
        now = datetime.now(UTC)
        full = {"iat": now, "exp": now + timedelta(minutes=5), **payload}
        return jwt.encode(full, SECRET, algorithm=settings.JWT_ALGORITHM)

    def test_unknown_role(self) -> None:
        self.assertIsNone(decode_access_token(self._encode({"id": 1, "role": "root"}), secret=SECRET))

    def test_missing_role(self) -> None:
        self.assertIsNone(decode_access_token(self._encode({"id": 1}), secret=SECRET))

    def test_non_integer_id(self) -> None:
        for bad in ["1", None, True, 1.5]:
            with self.subTest(id=bad):
                self.assertIsNone(
                    decode_access_token(self._encode({"id": bad, "role": "user"}), secret=SECRET)
                )

    def test_missing_exp(self) -> None:
        token = jwt.encode(
            {"id": 1, "role": "user", "iat": datetime.now(UTC)},
            SECRET,
            algorithm=settings.JWT_ALGORITHM,
        )
        self.assertIsNone(decode_access_token(token, secret=SECRET))


class TestStoredCredential(unittest.TestCase):
    """Bcrypt hashes and legacy plaintext values verify through the same interface."""

    def setUp(self) -> None:
        rounds = patch("app.core.security.BCRYPT_ROUNDS", 4)
        rounds.start()
        self.addCleanup(rounds.stop)

    def test_hashed_value_is_recognized(self) -> None:
        cred = stored_credential(hash_password("Secret123"))
        self.assertIsInstance(cred, HashedPassword)
        self.assertTrue(cred.verify("Secret123"))
        self.assertFalse(cred.verify("secret123"))

    def test_plaintext_value_is_legacy(self) -> None:
        cred = stored_credential("password123")
        self.assertIsInstance(cred, PlaintextPassword)
        self.assertEqual(cred.kind, "plaintext")
        self.assertTrue(cred.verify("password123"))
        self.assertFalse(cred.verify("password1234"))

    def test_missing_value_never_matches_a_password(self) -> None:
        cred = stored_credential(None)
        self.assertIsInstance(cred, PlaintextPassword)
        self.assertFalse(cred.verify("anything"))

    def test_corrupt_hash_fails_closed(self) -> None:
        cred = stored_credential("$2b$not-a-real-hash")
        self.assertIsInstance(cred, HashedPassword)
        self.assertFalse(cred.verify("not-a-real-hash"))

    def test_hash_is_salted(self) -> None:
        self.assertNotEqual(hash_password("Secret123"), hash_password("Secret123"))


if __name__ == "__main__":
    unittest.main()
