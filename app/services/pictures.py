from __future__ import annotations

from collections.abc import Callable
from urllib.parse import urlparse

import structlog

from app.core.conversions import conversions_for
from app.core.exceptions import BadRequest, InternalServerError, MediaError
from app.infra.unit_of_work import UnitOfWork
from app.repositories.interfaces import PictureRow

UnitOfWorkFactory = Callable[[], UnitOfWork]

# No not-found variant: a missing picture row surfaces as an internal failure.
PICTURE_ERRORS = conversions_for(MediaError, internal=InternalServerError)

logger = structlog.get_logger(__name__)


def validate_image_url(image_url: str) -> None:
    if not image_url.strip():
        raise BadRequest("No file provided")
    parsed = urlparse(image_url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise BadRequest("Image URL must be an absolute http(s) URL")


class PictureService:
    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    async def list_pictures(self) -> list[PictureRow]:
        async with self._uow_factory() as uow:
            with PICTURE_ERRORS.converting():
                return await uow.pictures.list_recent()

    async def add_picture(self, *, user_id: int, image_url: str) -> PictureRow:
        validate_image_url(image_url)
        async with self._uow_factory() as uow:
            with PICTURE_ERRORS.converting():
                picture = await uow.pictures.create(user_id=user_id, image_url=image_url)
                await uow.commit()
        logger.info("picture_created", picture_id=picture.id, user_id=user_id)
        return picture

    async def get_picture(self, picture_id: int) -> PictureRow:
        async with self._uow_factory() as uow:
            with PICTURE_ERRORS.converting():
                return await uow.pictures.get(picture_id)
