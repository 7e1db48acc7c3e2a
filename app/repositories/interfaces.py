"""Repository abstractions for the service layer.

Implementations raise only ``app.repositories.errors.PersistenceError``
subclasses; raw driver errors are classified before they leave a repository.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol


@dataclass
class UserRow:
    id: int
    email: str
    display_name: str
    password: str
    email_verified: bool
    created_at: datetime | None


@dataclass
class VerificationRow:
    token: str
    user_id: int
    expires_at: datetime
    used_at: datetime | None


@dataclass
class PictureRow:
    id: int
    user_id: int
    image_url: str
    created_at: datetime | None


class UserRepository(Protocol):
    """Accounts and their email verification tokens."""

    async def create(self, *, email: str, display_name: str, password: str) -> UserRow: ...

    async def get(self, user_id: int) -> UserRow: ...

    async def find_by_email(self, email: str) -> UserRow | None: ...

    async def mark_verified(self, user_id: int) -> None: ...

    async def add_verification(
        self, *, token: str, user_id: int, expires_at: datetime
    ) -> VerificationRow: ...

    async def find_verification(self, token: str) -> VerificationRow | None: ...

    async def mark_verification_used(self, token: str, used_at: datetime) -> int:
        """Consume an unused token; returns the number of rows claimed (0 or 1)."""


class PictureRepository(Protocol):
    async def list_recent(self) -> list[PictureRow]: ...

    async def create(self, *, user_id: int, image_url: str) -> PictureRow: ...

    async def get(self, picture_id: int) -> PictureRow: ...
