"""SQLAlchemy declarative Base shared by the users and properties tables."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass
