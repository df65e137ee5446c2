"""Database models for authentication.

Table definitions for users. Uses SQLAlchemy Core with plain SQL (no ORM);
tables are created from these statements by the database module.
"""

from typing import Any


USERS_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    full_name TEXT NOT NULL,
    email TEXT NOT NULL UNIQUE,
    password_hash TEXT NOT NULL
)
"""

# All SQL statements for table setup
AUTH_TABLES_SQL = [
    USERS_TABLE_SQL,
]


class User:
    """User entity.

    Users are created by registration and never modified afterwards.

    Attributes:
        id: Store-assigned integer id
        full_name: Display name
        email: Unique, lower-cased email address
        password_hash: Argon2id hash (includes salt and parameters)
    """

    def __init__(
        self,
        id: int | None = None,
        full_name: str = "",
        email: str = "",
        password_hash: str = "",
    ):
        self.id = id
        self.full_name = full_name
        self.email = email
        self.password_hash = password_hash

    @classmethod
    def from_row(cls, row: Any) -> "User":
        """Create User instance from a result row."""
        return cls(
            id=row.id,
            full_name=row.full_name,
            email=row.email,
            password_hash=row.password_hash,
        )

    def __repr__(self) -> str:
        return f"<User {self.id} {self.email}>"
