"""Exhaustive mapping of domain errors onto the externally visible contract."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum

from app.core import exceptions as domain
from app.core.exceptions import DomainError, catalog_of, catalogs, variants


class StatusClass(str, Enum):
    BAD_REQUEST = "BadRequest"
    UNAUTHORIZED = "Unauthorized"
    NOT_FOUND = "NotFound"
    CONFLICT = "Conflict"
    GONE = "Gone"
    INTERNAL_ERROR = "InternalError"

    @property
    def http_status(self) -> int:
        return _HTTP_STATUS[self]


_HTTP_STATUS: dict[StatusClass, int] = {
    StatusClass.BAD_REQUEST: 400,
    StatusClass.UNAUTHORIZED: 401,
    StatusClass.NOT_FOUND: 404,
    StatusClass.CONFLICT: 409,
    StatusClass.GONE: 410,
    StatusClass.INTERNAL_ERROR: 500,
}


@dataclass(frozen=True)
class BoundaryError:
    status_class: StatusClass
    message: str

    @property
    def status_code(self) -> int:
        return self.status_class.http_status

    def to_body(self) -> dict[str, str | int]:
        return {"error": self.message, "status_code": self.status_code}


class UnmappedVariantError(RuntimeError):
    """A catalog variant has no status class. Raised at startup, never per request."""


class BoundaryErrorMapper:
    """Maps every variant of one catalog to exactly one status class.

    The table is checked on construction: a missing variant, or an entry that
    is not a variant of ``catalog``, raises ``UnmappedVariantError``.
    """

    def __init__(
        self,
        catalog: type[DomainError],
        table: Mapping[type[DomainError], StatusClass],
    ) -> None:
        self.catalog = catalog
        self._table = dict(table)
        self.check()

    def check(self) -> None:
        declared = variants(self.catalog)
        missing = [v.__name__ for v in declared if v not in self._table]
        foreign = [v.__name__ for v in self._table if v not in declared]
        if missing:
            raise UnmappedVariantError(
                f"{self.catalog.__name__} variants without a status class: {', '.join(missing)}"
            )
        if foreign:
            raise UnmappedVariantError(
                f"{self.catalog.__name__} mapping lists foreign variants: {', '.join(foreign)}"
            )

    def __call__(self, error: DomainError) -> BoundaryError:
        # Subclasses of a variant inherit its status class; the bare catalog is internal
        for cls in type(error).__mro__:
            if cls in self._table:
                return BoundaryError(self._table[cls], error.message)
        return BoundaryError(StatusClass.INTERNAL_ERROR, error.message)


map_identity_error = BoundaryErrorMapper(
    domain.IdentityError,
    {
        domain.Unauthorized: StatusClass.UNAUTHORIZED,
        domain.ValidationFailed: StatusClass.BAD_REQUEST,
        domain.InternalFailure: StatusClass.INTERNAL_ERROR,
        domain.InvalidToken: StatusClass.BAD_REQUEST,
        domain.TokenExpired: StatusClass.GONE,
        domain.TokenAlreadyUsed: StatusClass.CONFLICT,
        domain.NotFound: StatusClass.NOT_FOUND,
    },
)

map_media_error = BoundaryErrorMapper(
    domain.MediaError,
    {
        domain.InternalServerError: StatusClass.INTERNAL_ERROR,
        domain.BadRequest: StatusClass.BAD_REQUEST,
    },
)

BOUNDARY_MAPPERS: dict[type[DomainError], BoundaryErrorMapper] = {
    m.catalog: m for m in (map_identity_error, map_media_error)
}


def verify_boundary_mappings(
    declared: Iterable[type[DomainError]] | None = None,
    mappers: Mapping[type[DomainError], BoundaryErrorMapper] = BOUNDARY_MAPPERS,
) -> None:
    """Startup self-check: every declared catalog has a complete mapper."""
    for catalog in catalogs() if declared is None else declared:
        mapper = mappers.get(catalog)
        if mapper is None:
            raise UnmappedVariantError(f"no boundary mapper for catalog {catalog.__name__}")
        mapper.check()


def to_boundary_error(error: DomainError) -> BoundaryError:
    """Total over ``DomainError``: errors outside every mapped catalog are internal."""
    try:
        mapper = BOUNDARY_MAPPERS[catalog_of(error)]
    except (KeyError, TypeError):
        return BoundaryError(StatusClass.INTERNAL_ERROR, error.message)
    return mapper(error)


def status_class_for_http(status_code: int) -> StatusClass:
    """Fold a framework-raised HTTP status onto the closest status class."""
    for status_class, code in _HTTP_STATUS.items():
        if code == status_code:
            return status_class
    if status_code == 403:
        return StatusClass.UNAUTHORIZED
    if 400 <= status_code < 500:
        return StatusClass.BAD_REQUEST
    return StatusClass.INTERNAL_ERROR
