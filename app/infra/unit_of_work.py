"""Unit of Work abstraction used by the service layer."""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.repositories.errors import classify
from app.repositories.interfaces import PictureRepository, UserRepository
from app.repositories.sqlalchemy import SqlAlchemyPictureRepository, SqlAlchemyUserRepository


class UnitOfWork(Protocol, AbstractAsyncContextManager["UnitOfWork"]):
    """Defines the repository boundary exposed to services."""

    users: UserRepository
    pictures: PictureRepository

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...


class SqlAlchemyUnitOfWork(UnitOfWork):
    """Unit of Work backed by SQLAlchemy async sessions.

    Commit failures are classified like any other repository failure, so a
    service sees a ``PersistenceError`` whether the statement or the commit
    was rejected.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory
        self._session: AsyncSession | None = None
        self.users: UserRepository
        self.pictures: PictureRepository

    async def __aenter__(self) -> SqlAlchemyUnitOfWork:
        session = self._session_factory()
        self._session = session
        self.users = SqlAlchemyUserRepository(session)
        self.pictures = SqlAlchemyPictureRepository(session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self._session is None:
            return
        try:
            if exc_type:
                await self._session.rollback()
        finally:
            await self._session.close()
            self._session = None

    async def commit(self) -> None:
        if self._session is None:
            return
        try:
            await self._session.commit()
        except SQLAlchemyError as exc:
            raise classify(exc, "commit") from exc

    async def rollback(self) -> None:
        if self._session is not None:
            await self._session.rollback()
