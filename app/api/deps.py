"""Service providers for dependency injection."""

from __future__ import annotations

from app import db
from app.core.config import settings
from app.infra.unit_of_work import SqlAlchemyUnitOfWork
from app.services.pictures import PictureService
from app.services.users import UserService

__all__ = ["get_user_service", "get_picture_service"]


def _uow_factory() -> SqlAlchemyUnitOfWork:
    # Resolved per call so configure_engine() can swap the session factory
    return SqlAlchemyUnitOfWork(db.SessionLocal)


def get_user_service() -> UserService:
    return UserService(_uow_factory, token_ttl_hours=settings.verification_token_ttl_hours)


def get_picture_service() -> PictureService:
    return PictureService(_uow_factory)
