from __future__ import annotations

from fastapi import APIRouter, Depends

from app.api.deps import get_user_service
from app.schemas.common import ERROR_RESPONSES
from app.schemas.user import (
    CreateUserRequest,
    LoginRequest,
    LoginResponse,
    PublicUserResponse,
    UserResponse,
    VerificationIssuedResponse,
)
from app.services.users import UserService

router = APIRouter(tags=["users"], responses=ERROR_RESPONSES)


@router.post("/users", response_model=UserResponse, status_code=201, summary="Register a user")
async def create_user(
    payload: CreateUserRequest,
    svc: UserService = Depends(get_user_service),
):
    user = await svc.create_user(
        email=payload.email, display_name=payload.display_name, password=payload.password
    )
    return UserResponse.model_validate(user)


@router.post("/login", response_model=LoginResponse, summary="Check credentials")
async def login(payload: LoginRequest, svc: UserService = Depends(get_user_service)):
    user = await svc.login(email=payload.email, password=payload.password)
    return LoginResponse(user_id=user.id, email=user.email, display_name=user.display_name)


@router.get(
    "/users/{user_id}", response_model=PublicUserResponse, summary="Fetch a public profile"
)
async def get_user(user_id: int, svc: UserService = Depends(get_user_service)):
    return PublicUserResponse.model_validate(await svc.get_user(user_id))


@router.post(
    "/users/{user_id}/verification",
    response_model=VerificationIssuedResponse,
    status_code=201,
    summary="Issue an email verification token",
    description="The token itself is delivered by mail and never returned here.",
)
async def issue_verification(user_id: int, svc: UserService = Depends(get_user_service)):
    verification = await svc.issue_verification(user_id)
    return VerificationIssuedResponse(
        user_id=verification.user_id, expires_at=verification.expires_at
    )


@router.get("/verify-email/{token}", response_model=UserResponse, summary="Verify an email address")
async def verify_email(token: str, svc: UserService = Depends(get_user_service)):
    return UserResponse.model_validate(await svc.verify_email(token))
