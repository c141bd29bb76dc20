"""CRUD operations."""

from googlelogin.db.crud.users import get_user_by_google_id, upsert_google_user

__all__ = [
    "get_user_by_google_id",
    "upsert_google_user",
]
