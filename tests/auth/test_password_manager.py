# tests/auth/test_password_manager.py
import pytest

from app.managers.password_manager import PasswordHasher, hash_password, verify_password


@pytest.mark.asyncio
async def test_hash_and_verify() -> None:
    hashed = await hash_password("s3cretpass")

    assert hashed.startswith("$argon2")
    assert await verify_password("s3cretpass", hashed)
    assert not await verify_password("wrong", hashed)


@pytest.mark.asyncio
async def test_missing_hash_never_verifies() -> None:
    assert not await verify_password("anything", None)


def test_empty_password_is_rejected() -> None:
    with pytest.raises(ValueError, match="empty"):
        PasswordHasher().hash("")


def test_corrupted_hash_does_not_raise() -> None:
    assert PasswordHasher().verify("anything", "$argon2id$garbage") is False
