"""Shared fixtures: in-memory SQLite database wired into the app through dependency overrides."""

import unittest
from unittest.mock import patch

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import get_db
from app.core.limiter import limiter
from app.core.security import create_access_token, hash_password
from app.main import app
from app.models import Base, Property, User


def make_session_factory() -> sessionmaker[Session]:
    """Fresh in-memory database with all tables; StaticPool keeps one shared connection."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


def bearer(subject_id: int, role: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token(subject_id=subject_id, role=role)}"}


class DbTestCase(unittest.TestCase):
    """Gives each test its own empty database and cheap bcrypt hashing."""

    def setUp(self) -> None:
        self.Session = make_session_factory()
        rounds = patch("app.core.security.BCRYPT_ROUNDS", 4)
        rounds.start()
        self.addCleanup(rounds.stop)

    def add_user(
        self,
        username: str,
        password: str,
        email: str | None = None,
        role: str = "user",
        is_active: bool = True,
        hashed: bool = True,
    ) -> int:
        with self.Session() as db:
            user = User(
                username=username,
                email=email or f"{username}@example.com",
                password_hash=hash_password(password) if hashed else password,
                role=role,
                is_active=is_active,
            )
            db.add(user)
            db.commit()
            return user.id

    def add_property(self, **overrides: object) -> int:
        values: dict[str, object] = {
            "title": "Rumah Contoh",
            "price": 1_500_000_000,
            "location": "Jakarta",
            "property_type": "house",
            "status": "Dijual",
            "featured": False,
        }
        values.update(overrides)
        with self.Session() as db:
            row = Property(**values)
            db.add(row)
            db.commit()
            return row.id


class ApiTestCase(DbTestCase):
    """DbTestCase plus a TestClient whose get_db yields sessions on the test database."""

    def setUp(self) -> None:
        super().setUp()

        def override_get_db():
            db = self.Session()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.addCleanup(app.dependency_overrides.clear)
        limiter.reset()
        self.client = TestClient(app)

    def admin_headers(self) -> dict[str, str]:
        return bearer(0, "admin")

    def user_headers(self, subject_id: int = 7) -> dict[str, str]:
        return bearer(subject_id, "user")
