"""SQLAlchemy implementation of the picture repository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.picture import Picture
from app.repositories.errors import persistence_errors
from app.repositories.interfaces import PictureRepository, PictureRow


def _picture_row(p: Picture) -> PictureRow:
    return PictureRow(
        id=int(p.id),
        user_id=int(p.user_id),
        image_url=str(p.image_url),
        created_at=p.created_at,
    )


class SqlAlchemyPictureRepository(PictureRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def list_recent(self) -> list[PictureRow]:
        stmt = select(Picture).order_by(Picture.created_at.desc(), Picture.id.desc())
        with persistence_errors("picture list"):
            rows = (await self._session.execute(stmt)).scalars().all()
        return [_picture_row(p) for p in rows]

    async def create(self, *, user_id: int, image_url: str) -> PictureRow:
        picture = Picture(user_id=int(user_id), image_url=image_url)
        with persistence_errors("picture create"):
            self._session.add(picture)
            await self._session.flush()
            await self._session.refresh(picture)
        return _picture_row(picture)

    async def get(self, picture_id: int) -> PictureRow:
        with persistence_errors("picture lookup"):
            picture = (
                await self._session.execute(select(Picture).where(Picture.id == int(picture_id)))
            ).scalar_one()
        return _picture_row(picture)
