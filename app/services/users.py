"""Identity use cases: registration, login and email verification."""

from __future__ import annotations

import hashlib
import re
import secrets
from collections.abc import Callable
from datetime import timedelta

import structlog
from pydantic import EmailStr, TypeAdapter, ValidationError

from app.core.conversions import conversions_for
from app.core.exceptions import (
    IdentityError,
    InternalFailure,
    InvalidToken,
    NotFound,
    TokenAlreadyUsed,
    TokenExpired,
    Unauthorized,
    ValidationFailed,
)
from app.infra.unit_of_work import UnitOfWork
from app.repositories.interfaces import UserRow, VerificationRow
from app.utils.datetime import as_utc, utcnow

UnitOfWorkFactory = Callable[[], UnitOfWork]

USER_ERRORS = conversions_for(IdentityError, internal=InternalFailure, not_found=NotFound)

_EMAIL = TypeAdapter(EmailStr)
DISPLAY_NAME_MAX = 50
PASSWORD_MIN = 8

logger = structlog.get_logger(__name__)


def hash_password(password: str) -> str:
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


def validate_new_user(email: str, display_name: str, password: str) -> None:
    try:
        _EMAIL.validate_python(email)
    except ValidationError as exc:
        raise ValidationFailed("Invalid email address") from exc
    if not display_name.strip() or len(display_name) > DISPLAY_NAME_MAX:
        raise ValidationFailed(f"Display name must be 1 to {DISPLAY_NAME_MAX} characters")
    if len(password) < PASSWORD_MIN:
        raise ValidationFailed(f"Password must be at least {PASSWORD_MIN} characters")
    if not re.search(r"[A-Za-z]", password) or not re.search(r"\d", password):
        raise ValidationFailed("Password must contain a letter and a digit")


class UserService:
    """Use cases of the identity domain.

    Every repository call is wrapped in ``USER_ERRORS.converting()`` so callers
    only ever see ``IdentityError`` variants.
    """

    def __init__(self, uow_factory: UnitOfWorkFactory, *, token_ttl_hours: int = 24) -> None:
        self._uow_factory = uow_factory
        self._token_ttl = timedelta(hours=token_ttl_hours)

    async def create_user(self, *, email: str, display_name: str, password: str) -> UserRow:
        validate_new_user(email, display_name, password)
        async with self._uow_factory() as uow:
            with USER_ERRORS.converting():
                user = await uow.users.create(
                    email=email, display_name=display_name, password=hash_password(password)
                )
                await uow.commit()
        logger.info("user_created", user_id=user.id)
        return user

    async def login(self, *, email: str, password: str) -> UserRow:
        async with self._uow_factory() as uow:
            with USER_ERRORS.converting():
                user = await uow.users.find_by_email(email)
        if user is None or not secrets.compare_digest(user.password, hash_password(password)):
            raise Unauthorized("Invalid email or password")
        return user

    async def get_user(self, user_id: int) -> UserRow:
        async with self._uow_factory() as uow:
            with USER_ERRORS.converting():
                return await uow.users.get(user_id)

    async def issue_verification(self, user_id: int) -> VerificationRow:
        token = secrets.token_urlsafe(32)
        expires_at = utcnow() + self._token_ttl
        async with self._uow_factory() as uow:
            with USER_ERRORS.converting():
                await uow.users.get(user_id)
                verification = await uow.users.add_verification(
                    token=token, user_id=user_id, expires_at=expires_at
                )
                await uow.commit()
        logger.info("verification_issued", user_id=user_id)
        return verification

    async def verify_email(self, token: str) -> UserRow:
        async with self._uow_factory() as uow:
            with USER_ERRORS.converting():
                verification = await uow.users.find_verification(token)
            if verification is None:
                raise InvalidToken("Invalid verification token")
            if verification.used_at is not None:
                raise TokenAlreadyUsed("Verification token has already been used")
            now = utcnow()
            if as_utc(verification.expires_at) <= now:
                raise TokenExpired("Verification token has expired")
            with USER_ERRORS.converting():
                claimed = await uow.users.mark_verification_used(token, now)
            if not claimed:
                raise TokenAlreadyUsed("Verification token has already been used")
            with USER_ERRORS.converting():
                await uow.users.mark_verified(verification.user_id)
                user = await uow.users.get(verification.user_id)
                await uow.commit()
        logger.info("email_verified", user_id=user.id)
        return user
