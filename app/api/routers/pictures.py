from __future__ import annotations

from fastapi import APIRouter, Depends

from app.api.deps import get_picture_service
from app.schemas.common import ERROR_RESPONSES
from app.schemas.picture import PictureCreateRequest, PictureItem, PicturesResponse
from app.services.pictures import PictureService

router = APIRouter(prefix="/pictures", tags=["pictures"], responses=ERROR_RESPONSES)


@router.get("", response_model=PicturesResponse, summary="List pictures, newest first")
async def list_pictures(svc: PictureService = Depends(get_picture_service)):
    rows = await svc.list_pictures()
    return PicturesResponse(pictures=[PictureItem.model_validate(r) for r in rows])


@router.post("", response_model=PictureItem, status_code=201, summary="Register an uploaded picture")
async def create_picture(
    payload: PictureCreateRequest,
    svc: PictureService = Depends(get_picture_service),
):
    row = await svc.add_picture(user_id=payload.user_id, image_url=payload.image_url)
    return PictureItem.model_validate(row)


@router.get("/{picture_id}", response_model=PictureItem, summary="Fetch a picture")
async def get_picture(picture_id: int, svc: PictureService = Depends(get_picture_service)):
    return PictureItem.model_validate(await svc.get_picture(picture_id))
