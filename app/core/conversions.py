"""Per-catalog conversion of storage failures into domain errors.

``conversions_for`` builds, for any catalog, the two total conversions a
service needs at its repository boundary::

    USER_ERRORS = conversions_for(IdentityError, internal=InternalFailure, not_found=NotFound)

    with USER_ERRORS.converting():
        user = await uow.users.get(user_id)

Unique-constraint violations are reported as the catalog's internal failure
unless a ``conflict`` variant is designated explicitly.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Generic, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import DomainError, variants
from app.repositories.errors import (
    PersistenceError,
    RowNotFound,
    UniqueConstraintViolation,
    describe,
)

E = TypeVar("E", bound=DomainError)

DATABASE_ERROR_PREFIX = "Database error: "


@dataclass(frozen=True)
class ErrorConversions(Generic[E]):
    catalog: type[E]
    internal: type[E]
    not_found: type[E] | None = None
    conflict: type[E] | None = None

    def __post_init__(self) -> None:
        declared = variants(self.catalog)
        for role in ("internal", "not_found", "conflict"):
            variant = getattr(self, role)
            if variant is not None and variant not in declared:
                raise TypeError(
                    f"{variant.__name__} is not a variant of {self.catalog.__name__} "
                    f"(designated as {role})"
                )

    def from_storage_error(self, exc: BaseException) -> E:
        """Any raw storage error becomes the generic internal failure."""
        return self.internal(DATABASE_ERROR_PREFIX + describe(exc))

    def from_persistence_outcome(self, outcome: PersistenceError) -> E:
        if isinstance(outcome, RowNotFound) and self.not_found is not None:
            return self.not_found(outcome.context)
        if isinstance(outcome, UniqueConstraintViolation) and self.conflict is not None:
            return self.conflict(outcome.context)
        return self.internal(DATABASE_ERROR_PREFIX + outcome.message)

    @contextmanager
    def converting(self) -> Iterator[None]:
        """Single conversion point for one repository boundary crossing."""
        try:
            yield
        except PersistenceError as exc:
            raise self.from_persistence_outcome(exc) from exc
        except SQLAlchemyError as exc:
            raise self.from_storage_error(exc) from exc


def conversions_for(
    catalog: type[E],
    *,
    internal: type[E],
    not_found: type[E] | None = None,
    conflict: type[E] | None = None,
) -> ErrorConversions[E]:
    return ErrorConversions(
        catalog=catalog, internal=internal, not_found=not_found, conflict=conflict
    )
