"""SQLAlchemy implementation of the user repository."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.email_verification import EmailVerification
from app.models.user import User
from app.repositories.errors import persistence_errors
from app.repositories.interfaces import UserRepository, UserRow, VerificationRow


def _user_row(user: User) -> UserRow:
    return UserRow(
        id=int(user.id),
        email=str(user.email),
        display_name=str(user.display_name),
        password=str(user.password),
        email_verified=bool(user.email_verified),
        created_at=user.created_at,
    )


def _verification_row(v: EmailVerification) -> VerificationRow:
    return VerificationRow(
        token=str(v.token),
        user_id=int(v.user_id),
        expires_at=v.expires_at,
        used_at=v.used_at,
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def create(self, *, email: str, display_name: str, password: str) -> UserRow:
        user = User(email=email, display_name=display_name, password=password)
        with persistence_errors("user create"):
            self._session.add(user)
            await self._session.flush()
            await self._session.refresh(user)
        return _user_row(user)

    async def get(self, user_id: int) -> UserRow:
        with persistence_errors("user lookup"):
            user = (
                await self._session.execute(select(User).where(User.id == int(user_id)))
            ).scalar_one()
        return _user_row(user)

    async def find_by_email(self, email: str) -> UserRow | None:
        with persistence_errors("user lookup by email"):
            user = (
                await self._session.execute(select(User).where(User.email == email))
            ).scalar_one_or_none()
        return _user_row(user) if user is not None else None

    async def mark_verified(self, user_id: int) -> None:
        with persistence_errors("user verify"):
            await self._session.execute(
                update(User).where(User.id == int(user_id)).values(email_verified=True)
            )

    async def add_verification(
        self, *, token: str, user_id: int, expires_at: datetime
    ) -> VerificationRow:
        v = EmailVerification(token=token, user_id=int(user_id), expires_at=expires_at)
        with persistence_errors("verification create"):
            self._session.add(v)
            await self._session.flush()
        return _verification_row(v)

    async def find_verification(self, token: str) -> VerificationRow | None:
        with persistence_errors("verification lookup"):
            v = await self._session.get(EmailVerification, token)
        return _verification_row(v) if v is not None else None

    async def mark_verification_used(self, token: str, used_at: datetime) -> int:
        with persistence_errors("verification update"):
            result = await self._session.execute(
                update(EmailVerification)
                .where(EmailVerification.token == token, EmailVerification.used_at.is_(None))
                .values(used_at=used_at)
            )
        return result.rowcount
