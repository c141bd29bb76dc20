"""SQLAlchemy models."""

from googlelogin.models.base import Base
from googlelogin.models.user import User

__all__ = [
    "Base",
    "User",
]
