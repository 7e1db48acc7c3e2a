from .common import ErrorResponse, OkResponse
from .picture import PictureCreateRequest, PictureItem, PicturesResponse
from .user import (
    CreateUserRequest,
    LoginRequest,
    LoginResponse,
    PublicUserResponse,
    UserResponse,
    VerificationIssuedResponse,
)

__all__ = [
    "ErrorResponse",
    "OkResponse",
    "CreateUserRequest",
    "LoginRequest",
    "LoginResponse",
    "PublicUserResponse",
    "UserResponse",
    "VerificationIssuedResponse",
    "PictureCreateRequest",
    "PictureItem",
    "PicturesResponse",
]
