from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class PictureCreateRequest(BaseModel):
    user_id: int = Field(description="Uploader's user ID")
    image_url: str = Field(description="Public URL of the stored image")


class PictureItem(BaseModel):
    id: int
    user_id: int
    image_url: str
    created_at: datetime | None = None

    model_config = {"from_attributes": True}


class PicturesResponse(BaseModel):
    pictures: list[PictureItem]
