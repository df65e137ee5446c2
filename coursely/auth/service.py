"""Authentication service layer.

Business logic for:
- User registration
- Credential verification (login)
"""

from typing import TYPE_CHECKING

import structlog
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from coursely.auth.models import User
from coursely.auth.security import hash_password, verify_password
from coursely.core.errors import AuthError, ConflictError, StorageError, require_fields


if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncEngine


logger = structlog.get_logger(__name__)


def normalize_email(email: str) -> str:
    """Trim and lower-case an email address."""
    return email.strip().lower()


class AuthService:
    """Registration and login against the users table."""

    def __init__(self, engine: "AsyncEngine"):
        self.engine = engine
        self._prepare_statements()

    def _prepare_statements(self) -> None:
        self._get_user_by_email = text(
            "SELECT id, full_name, email, password_hash FROM users WHERE email = :email"
        )
        self._insert_user = text("""
            INSERT INTO users (full_name, email, password_hash)
            VALUES (:full_name, :email, :password_hash)
        """)

    async def get_user_by_email(self, email: str) -> User | None:
        """Find user by email address.

        Raises:
            SQLAlchemyError: On store failure (callers decide how to report it)
        """
        async with self.engine.connect() as conn:
            result = await conn.execute(
                self._get_user_by_email, {"email": normalize_email(email)}
            )
            row = result.one_or_none()
        return User.from_row(row) if row else None

    async def register_user(
        self,
        full_name: str | None,
        email: str | None,
        password: str | None,
    ) -> int:
        """Register a new user.

        Returns:
            The new user's id

        Raises:
            ValidationError: If any field is absent
            ConflictError: If the email is already registered
            StorageError: On any other store failure
        """
        require_fields(
            "All fields are required",
            full_name=full_name,
            email=email,
            password=password,
        )

        user = User(
            full_name=full_name.strip(),
            email=normalize_email(email),
            password_hash=hash_password(password),
        )

        try:
            async with self.engine.begin() as conn:
                result = await conn.execute(
                    self._insert_user,
                    {
                        "full_name": user.full_name,
                        "email": user.email,
                        "password_hash": user.password_hash,
                    },
                )
                user.id = result.lastrowid
        except IntegrityError as e:
            logger.info("registration_email_conflict", email=user.email)
            raise ConflictError("This email is already registered.") from e
        except SQLAlchemyError as e:
            logger.error("registration_failed", error=str(e))
            raise StorageError("Database error.") from e

        logger.info("user_registered", new_user_id=user.id)
        return user.id

    async def authenticate_user(self, email: str | None, password: str | None) -> User:
        """Verify credentials.

        Every failure, including a store failure during lookup, raises the
        same AuthError so callers cannot tell which check failed.

        Raises:
            AuthError: If the credentials are not valid
        """
        if not email or not password:
            raise AuthError

        try:
            user = await self.get_user_by_email(email)
        except SQLAlchemyError as e:
            logger.error("login_lookup_failed", error=str(e))
            raise AuthError from e

        if user is None or not verify_password(password, user.password_hash):
            logger.info("login_failed")
            raise AuthError

        logger.info("login_succeeded", login_user_id=user.id)
        return user
