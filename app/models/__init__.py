"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.property import Property
from app.models.user import User

__all__ = ["Base", "Property", "User"]
