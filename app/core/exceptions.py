"""Domain error catalogs for the service layer.

A catalog is a base class deriving from ``DomainError``; its direct
subclasses form the catalog's closed set of variants. Each variant carries
only a message, defaulting to the variant's fixed template.
"""

from __future__ import annotations

from typing import ClassVar


class DomainError(Exception):
    """Base class for domain-specific failures."""

    default_message: ClassVar[str] = "Domain error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message if message is not None else self.default_message
        super().__init__(self.message)

    @property
    def variant(self) -> str:
        return type(self).__name__

    def __repr__(self) -> str:
        return f"{self.variant}({self.message!r})"


def catalogs() -> tuple[type[DomainError], ...]:
    """Catalogs declared in this module (direct subclasses of ``DomainError``)."""
    return tuple(c for c in DomainError.__subclasses__() if c.__module__ == __name__)


def variants(catalog: type[DomainError]) -> tuple[type[DomainError], ...]:
    return tuple(catalog.__subclasses__())


def catalog_of(error: DomainError | type[DomainError]) -> type[DomainError]:
    cls = error if isinstance(error, type) else type(error)
    for base in cls.__mro__:
        if DomainError in base.__bases__:
            return base
    raise TypeError(f"{cls.__name__} does not belong to a declared catalog")


# ---- identity ----


class IdentityError(DomainError):
    """Failures of account, login and email verification use cases."""


class Unauthorized(IdentityError):
    default_message = "Unauthorized"


class ValidationFailed(IdentityError):
    default_message = "Validation failed"


class InternalFailure(IdentityError):
    default_message = "Internal server error"


class InvalidToken(IdentityError):
    default_message = "Invalid token"


class TokenExpired(IdentityError):
    default_message = "Token expired"


class TokenAlreadyUsed(IdentityError):
    default_message = "Token already used"


class NotFound(IdentityError):
    default_message = "User not found"


# ---- media ----


class MediaError(DomainError):
    """Failures of picture listing and upload use cases."""


class InternalServerError(MediaError):
    default_message = "Internal server error"


class BadRequest(MediaError):
    default_message = "Bad request"
