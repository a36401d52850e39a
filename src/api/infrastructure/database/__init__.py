"""Database infrastructure - shared declarative base and session plumbing."""

from infrastructure.database.models import Base, TimestampMixin

__all__ = [
    "Base",
    "TimestampMixin",
]
