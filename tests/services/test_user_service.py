from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy.exc import OperationalError

from app.core.exceptions import (
    InternalFailure,
    InvalidToken,
    NotFound,
    TokenAlreadyUsed,
    TokenExpired,
    Unauthorized,
    ValidationFailed,
)
from app.repositories.interfaces import VerificationRow
from app.services.users import hash_password


async def _register(user_service, email="taro@example.com"):
    return await user_service.create_user(
        email=email, display_name="Taro", password="password123"
    )


@pytest.mark.asyncio
async def test_create_user_stores_hashed_password(user_service, uow):
    user = await _register(user_service)

    assert user.email == "taro@example.com"
    assert user.password == hash_password("password123")
    assert user.password != "password123"
    assert uow.commits == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("email", "display_name", "password"),
    [
        ("not-an-email", "Taro", "password123"),
        ("a@b..com", "Taro", "password123"),
        ("a@-b.com", "Taro", "password123"),
        ("a@b.c,d", "Taro", "password123"),
        ("a(b)@c.com", "Taro", "password123"),
        ("taro@example.com", "", "password123"),
        ("taro@example.com", "x" * 51, "password123"),
        ("taro@example.com", "Taro", "short1"),
        ("taro@example.com", "Taro", "onlyletters"),
        ("taro@example.com", "Taro", "12345678"),
    ],
)
async def test_create_user_validation(user_service, uow, email, display_name, password):
    with pytest.raises(ValidationFailed):
        await user_service.create_user(email=email, display_name=display_name, password=password)
    assert uow.users.users == {}


@pytest.mark.asyncio
async def test_duplicate_email_surfaces_as_internal_failure(user_service, uow):
    await _register(user_service)

    with pytest.raises(InternalFailure) as excinfo:
        await _register(user_service)

    assert excinfo.value.message == "Database error: UNIQUE constraint failed: users.email"
    assert uow.rollbacks == 1


@pytest.mark.asyncio
async def test_login(user_service):
    await _register(user_service)

    user = await user_service.login(email="taro@example.com", password="password123")
    assert user.display_name == "Taro"

    with pytest.raises(Unauthorized):
        await user_service.login(email="taro@example.com", password="wrongpass1")
    with pytest.raises(Unauthorized):
        await user_service.login(email="nobody@example.com", password="password123")


@pytest.mark.asyncio
async def test_get_missing_user_is_not_found(user_service):
    with pytest.raises(NotFound) as excinfo:
        await user_service.get_user(42)

    assert excinfo.value.message == "user lookup"


@pytest.mark.asyncio
async def test_storage_outage_is_internal_failure(user_service, uow):
    uow.users.fail_with = OperationalError("SELECT", {}, Exception("connection refused"))

    with pytest.raises(InternalFailure) as excinfo:
        await user_service.login(email="taro@example.com", password="password123")

    assert excinfo.value.message == "Database error: connection refused"


@pytest.mark.asyncio
async def test_issue_and_verify_email(user_service, uow):
    user = await _register(user_service)

    verification = await user_service.issue_verification(user.id)
    assert verification.expires_at > datetime.now(UTC) + timedelta(hours=23)

    verified = await user_service.verify_email(verification.token)

    assert verified.email_verified is True
    assert uow.users.verifications[verification.token].used_at is not None


@pytest.mark.asyncio
async def test_issue_verification_for_missing_user(user_service):
    with pytest.raises(NotFound):
        await user_service.issue_verification(7)


@pytest.mark.asyncio
async def test_verify_unknown_token(user_service):
    with pytest.raises(InvalidToken):
        await user_service.verify_email("nope")


@pytest.mark.asyncio
async def test_verify_used_token(user_service):
    user = await _register(user_service)
    verification = await user_service.issue_verification(user.id)
    await user_service.verify_email(verification.token)

    with pytest.raises(TokenAlreadyUsed):
        await user_service.verify_email(verification.token)


@pytest.mark.asyncio
async def test_verify_expired_token_accepts_naive_timestamps(user_service, uow):
    user = await _register(user_service)
    uow.users.verifications["old"] = VerificationRow(
        token="old",
        user_id=user.id,
        expires_at=datetime.now(UTC).replace(tzinfo=None) - timedelta(minutes=1),
        used_at=None,
    )

    with pytest.raises(TokenExpired):
        await user_service.verify_email("old")


@pytest.mark.asyncio
async def test_verify_token_claimed_by_another_request(user_service, uow, monkeypatch):
    user = await _register(user_service)
    verification = await user_service.issue_verification(user.id)
    stale = uow.users.verifications[verification.token]
    # Another request consumes the token after this one has read it
    await uow.users.mark_verification_used(verification.token, datetime.now(UTC))

    async def _stale_read(token):
        return stale

    monkeypatch.setattr(uow.users, "find_verification", _stale_read)

    with pytest.raises(TokenAlreadyUsed) as excinfo:
        await user_service.verify_email(verification.token)

    assert excinfo.value.message == "Verification token has already been used"
    assert uow.users.users[user.id].email_verified is False
    assert uow.rollbacks == 1
