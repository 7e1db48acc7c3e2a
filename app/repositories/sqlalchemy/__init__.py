"""SQLAlchemy implementations of repository interfaces."""

from .picture import SqlAlchemyPictureRepository
from .user import SqlAlchemyUserRepository

__all__ = [
    "SqlAlchemyUserRepository",
    "SqlAlchemyPictureRepository",
]
