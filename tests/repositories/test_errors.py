from __future__ import annotations

import sqlite3

import pytest
from sqlalchemy.exc import (
    IntegrityError,
    MultipleResultsFound,
    NoResultFound,
    OperationalError,
)

from app.repositories.errors import (
    PersistenceError,
    RowNotFound,
    StorageFailure,
    UniqueConstraintViolation,
    classify,
    describe,
    is_unique_violation,
    persistence_errors,
)


class _PgDriverError(Exception):
    """Stands in for a psycopg/asyncpg error carrying a SQLSTATE."""

    def __init__(self, message: str, sqlstate: str) -> None:
        super().__init__(message)
        self.sqlstate = sqlstate


def test_no_rows_becomes_row_not_found_with_context():
    outcome = classify(NoResultFound("No row was found when one was required"), "user lookup")

    assert isinstance(outcome, RowNotFound)
    assert outcome.context == "user lookup"


def test_row_not_found_without_context_uses_driver_text():
    outcome = classify(NoResultFound("No row was found when one was required"))

    assert isinstance(outcome, RowNotFound)
    assert outcome.context == "No row was found when one was required"


def test_postgres_unique_violation_by_sqlstate():
    orig = _PgDriverError(
        'duplicate key value violates unique constraint "uq_pictures_user_request"', "23505"
    )
    exc = IntegrityError("INSERT INTO pictures ...", {}, orig)

    outcome = classify(exc, "picture create")

    assert isinstance(outcome, UniqueConstraintViolation)
    assert "uq_pictures_user_request" in outcome.context


def test_sqlstate_found_on_wrapped_cause():
    inner = _PgDriverError("duplicate key", "23505")
    adapted = Exception("<class 'asyncpg.exceptions.UniqueViolationError'>: duplicate key")
    adapted.__cause__ = inner

    assert is_unique_violation(IntegrityError("INSERT", {}, adapted))


def test_sqlite_unique_violation_by_message():
    exc = IntegrityError("INSERT", {}, sqlite3.IntegrityError("UNIQUE constraint failed: users.email"))

    outcome = classify(exc)

    assert isinstance(outcome, UniqueConstraintViolation)
    assert outcome.context == "UNIQUE constraint failed: users.email"


def test_other_integrity_errors_are_storage_failures():
    orig = _PgDriverError('null value in column "email" violates not-null constraint', "23502")

    outcome = classify(IntegrityError("INSERT", {}, orig))

    assert isinstance(outcome, StorageFailure)
    assert "not-null" in outcome.detail


@pytest.mark.parametrize(
    "exc",
    [
        OperationalError("SELECT 1", {}, Exception("connection refused")),
        MultipleResultsFound("Multiple rows were found when exactly one was required"),
        RuntimeError("driver exploded"),
    ],
)
def test_everything_else_is_storage_failure(exc):
    assert isinstance(classify(exc, "user lookup"), StorageFailure)


def test_classified_outcome_passes_through():
    outcome = RowNotFound("picture lookup")

    assert classify(outcome, "other") is outcome


def test_classify_never_raises_on_unprintable_errors():
    class _Unprintable(Exception):
        def __str__(self) -> str:
            raise ValueError("nope")

    outcome = classify(_Unprintable())

    assert isinstance(outcome, StorageFailure)
    assert outcome.detail == "_Unprintable"


def test_describe_prefers_driver_error():
    exc = OperationalError("SELECT 1", {}, Exception("connection refused"))

    assert describe(exc) == "connection refused"


def test_persistence_errors_reraises_classified_outcome():
    with pytest.raises(RowNotFound) as excinfo:
        with persistence_errors("user lookup"):
            raise NoResultFound("No row was found when one was required")

    assert excinfo.value.context == "user lookup"
    assert isinstance(excinfo.value.__cause__, NoResultFound)


def test_persistence_errors_leaves_non_storage_errors_alone():
    with pytest.raises(KeyError):
        with persistence_errors("user lookup"):
            raise KeyError("x")


def test_outcomes_share_a_base():
    for outcome in (StorageFailure("d"), RowNotFound("c"), UniqueConstraintViolation("c")):
        assert isinstance(outcome, PersistenceError)
        assert outcome.message in ("d", "c")
