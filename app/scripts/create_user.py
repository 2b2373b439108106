"""
Create a user (e.g. a persisted admin to replace the bootstrap login). Run from project root:
  python -m app.scripts.create_user USERNAME EMAIL PASSWORD [role] [--update]
Example:
  python -m app.scripts.create_user admin admin@example.com your-secure-password admin
"""
import argparse
import logging
import sys

from sqlalchemy import or_

from app.core.database import SessionLocal
from app.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
    hash_password,
)
from app.models.user import User

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create or update a user account.")
    parser.add_argument("username", help=f"Username ({USERNAME_MIN_LEN}-{USERNAME_MAX_LEN} chars)")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("role", nargs="?", default="user", choices=["user", "admin"])
    parser.add_argument(
        "--update",
        action="store_true",
        help="If the username exists, reset its password, role and email, and reactivate it.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    username = args.username.strip()
    email = args.email.strip().lower()
    if not (USERNAME_MIN_LEN <= len(username) <= USERNAME_MAX_LEN):
        print("Invalid username length.", file=sys.stderr)
        return 1
    if "@" not in email:
        print("Invalid email address.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        existing = (
            db.query(User)
            .filter(or_(User.username == username, User.email == email))
            .first()
        )
        if existing and not args.update:
            print(f"User '{username}' or email '{email}' already exists.", file=sys.stderr)
            return 1
        if existing:
            existing.username = username
            existing.email = email
            existing.password_hash = hash_password(args.password)
            existing.role = args.role
            existing.is_active = True
            db.commit()
            logger.info("Updated user '%s' with role '%s'.", username, args.role)
            return 0
        user = User(
            username=username,
            email=email,
            password_hash=hash_password(args.password),
            role=args.role,
            is_active=True,
            email_verified=args.role == "admin",
        )
        db.add(user)
        db.commit()
        logger.info("Created user '%s' with role '%s'.", username, args.role)
        return 0
    except Exception as e:
        db.rollback()
        logger.exception("Failed to create user: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
