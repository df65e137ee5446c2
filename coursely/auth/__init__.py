"""User registration and credential verification."""

from .models import AUTH_TABLES_SQL, User


__all__ = ["AUTH_TABLES_SQL", "User"]
