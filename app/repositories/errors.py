"""Classification of storage-driver failures into persistence outcomes.

Repositories never let a raw ``SQLAlchemyError`` escape: every failure is
reduced to one of three outcomes (``StorageFailure``, ``RowNotFound``,
``UniqueConstraintViolation``) which the service layer then converts into
its own domain catalog. Outcome text is for server-side diagnosis only.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import IntegrityError, NoResultFound, SQLAlchemyError

UNIQUE_VIOLATION_SQLSTATE = "23505"
_SQLITE_UNIQUE_MARKERS = ("UNIQUE constraint failed", "PRIMARY KEY must be unique")


class PersistenceError(Exception):
    """Base class for classified storage failures."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class StorageFailure(PersistenceError):
    """Any backend failure that is neither a missing row nor a unique violation."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class RowNotFound(PersistenceError):
    """A query expected to return exactly one row returned none."""

    def __init__(self, context: str) -> None:
        super().__init__(context)
        self.context = context


class UniqueConstraintViolation(PersistenceError):
    """A unique or primary-key constraint rejected a write."""

    def __init__(self, context: str) -> None:
        super().__init__(context)
        self.context = context


def describe(exc: BaseException) -> str:
    """Return the driver's own description of ``exc``."""
    orig = getattr(exc, "orig", None)
    source = orig if orig is not None else exc
    try:
        text = str(source)
    except Exception:
        text = ""
    return text or type(source).__name__


def is_row_not_found(exc: BaseException) -> bool:
    return isinstance(exc, NoResultFound)


def _sqlstate(err: BaseException | None) -> str | None:
    while err is not None:
        code = getattr(err, "sqlstate", None) or getattr(err, "pgcode", None)
        if isinstance(code, str):
            return code
        err = err.__cause__
    return None


def is_unique_violation(exc: BaseException) -> bool:
    if not isinstance(exc, IntegrityError):
        return False
    orig = exc.orig
    if _sqlstate(orig) == UNIQUE_VIOLATION_SQLSTATE:
        return True
    text = describe(exc)
    return any(marker in text for marker in _SQLITE_UNIQUE_MARKERS)


def classify(exc: BaseException, context: str | None = None) -> PersistenceError:
    """Reduce a storage-driver error to exactly one persistence outcome.

    ``context`` names the operation (e.g. ``"user lookup"``) and becomes the
    payload of ``RowNotFound``. Never raises.
    """
    if isinstance(exc, PersistenceError):
        return exc
    detail = describe(exc)
    if is_row_not_found(exc):
        return RowNotFound(context or detail)
    if is_unique_violation(exc):
        return UniqueConstraintViolation(detail)
    return StorageFailure(detail)


@contextmanager
def persistence_errors(context: str | None = None) -> Iterator[None]:
    """Re-raise any ``SQLAlchemyError`` inside the block as its outcome."""
    try:
        yield
    except SQLAlchemyError as exc:
        raise classify(exc, context) from exc
