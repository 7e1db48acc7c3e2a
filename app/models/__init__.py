# app/models/__init__.py
from .base import Base
from .email_verification import EmailVerification
from .picture import Picture
from .user import User

__all__ = ["Base", "User", "EmailVerification", "Picture"]
