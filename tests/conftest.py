# tests/conftest.py
from __future__ import annotations

import os

# The app reads settings at import time; keep tests off Sentry and the real DB.
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("SENTRY_DSN", "")
os.environ.setdefault("LOG_FORMAT", "json")

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from app.api.deps import get_picture_service, get_user_service  # noqa: E402
from app.main import create_app  # noqa: E402
from app.services.pictures import PictureService  # noqa: E402
from app.services.users import UserService  # noqa: E402
from tests.factories import (  # noqa: E402
    FakePictureRepository,
    FakeUserRepository,
    StubUnitOfWork,
)


@pytest.fixture
def uow() -> StubUnitOfWork:
    return StubUnitOfWork(FakeUserRepository(), FakePictureRepository())


@pytest.fixture
def user_service(uow: StubUnitOfWork) -> UserService:
    return UserService(lambda: uow, token_ttl_hours=24)


@pytest.fixture
def picture_service(uow: StubUnitOfWork) -> PictureService:
    return PictureService(lambda: uow)


@pytest.fixture
def app(user_service: UserService, picture_service: PictureService):
    application = create_app()
    application.dependency_overrides[get_user_service] = lambda: user_service
    application.dependency_overrides[get_picture_service] = lambda: picture_service
    try:
        yield application
    finally:
        application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def app_client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
