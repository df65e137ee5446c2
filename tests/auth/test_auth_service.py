"""Tests for AuthService against a real database."""

import pytest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

from coursely.auth.service import AuthService, normalize_email
from coursely.core.errors import AuthError, ConflictError, ValidationError


async def _count_users(engine: AsyncEngine) -> int:
    async with engine.connect() as conn:
        return (await conn.execute(text("SELECT COUNT(*) FROM users"))).scalar_one()


def test_normalize_email() -> None:
    assert normalize_email("  Maria@Example.COM ") == "maria@example.com"


class TestRegisterUser:
    @pytest.mark.asyncio
    async def test_returns_new_id(self, engine: AsyncEngine) -> None:
        service = AuthService(engine)
        first = await service.register_user("Ana", "ana@example.com", "pw-123456")
        second = await service.register_user("Bia", "bia@example.com", "pw-123456")
        assert first > 0
        assert second != first

    @pytest.mark.asyncio
    async def test_stores_hash_not_password(self, engine: AsyncEngine) -> None:
        service = AuthService(engine)
        await service.register_user("Ana", "ana@example.com", "pw-123456")

        user = await service.get_user_by_email("ana@example.com")
        assert user is not None
        assert user.password_hash != "pw-123456"
        assert user.password_hash.startswith("$argon2id$")

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts_once(self, engine: AsyncEngine) -> None:
        """Second registration with the same email fails; one user is added."""
        service = AuthService(engine)
        before = await _count_users(engine)

        await service.register_user("Ana", "ana@example.com", "pw-123456")
        with pytest.raises(ConflictError):
            await service.register_user("Ana Again", "ana@example.com", "other-pw")

        assert await _count_users(engine) == before + 1

    @pytest.mark.asyncio
    async def test_email_uniqueness_ignores_case(self, engine: AsyncEngine) -> None:
        service = AuthService(engine)
        await service.register_user("Ana", "ana@example.com", "pw-123456")
        with pytest.raises(ConflictError):
            await service.register_user("Ana", " ANA@example.com", "pw-123456")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "full_name,email,password",
        [
            (None, "ana@example.com", "pw"),
            ("Ana", None, "pw"),
            ("Ana", "ana@example.com", None),
            ("   ", "ana@example.com", "pw"),
        ],
    )
    async def test_missing_field(
        self, engine: AsyncEngine, full_name, email, password
    ) -> None:
        with pytest.raises(ValidationError, match="All fields are required"):
            await AuthService(engine).register_user(full_name, email, password)
        assert await _count_users(engine) == 0


class TestAuthenticateUser:
    @pytest.mark.asyncio
    async def test_valid_credentials(self, engine: AsyncEngine) -> None:
        service = AuthService(engine)
        user_id = await service.register_user("Ana", "ana@example.com", "pw-123456")

        user = await service.authenticate_user("Ana@Example.com", "pw-123456")
        assert user.id == user_id
        assert user.full_name == "Ana"

    @pytest.mark.asyncio
    async def test_failures_are_indistinguishable(self, engine: AsyncEngine) -> None:
        """Unknown email and wrong password raise the same error."""
        service = AuthService(engine)
        await service.register_user("Ana", "ana@example.com", "pw-123456")

        with pytest.raises(AuthError) as unknown:
            await service.authenticate_user("nobody@example.com", "pw-123456")
        with pytest.raises(AuthError) as wrong:
            await service.authenticate_user("ana@example.com", "wrong")
        with pytest.raises(AuthError) as missing:
            await service.authenticate_user(None, None)

        assert unknown.value.message == wrong.value.message == missing.value.message
