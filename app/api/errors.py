"""Centralized exception handlers: every failure leaves as ``{"error", "status_code"}``."""

from __future__ import annotations

import sentry_sdk
import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException

from app.core.boundary import (
    BoundaryError,
    StatusClass,
    status_class_for_http,
    to_boundary_error,
)
from app.core.config import Settings, settings
from app.core.exceptions import DomainError
from app.repositories.errors import PersistenceError

INTERNAL_ERROR_MESSAGE = "Internal server error occurred"

logger = structlog.get_logger(__name__)


def _respond(boundary: BoundaryError) -> JSONResponse:
    return JSONResponse(status_code=boundary.status_code, content=boundary.to_body())


def _domain_error_handler(cfg: Settings):
    def _handler(_: Request, exc: DomainError) -> JSONResponse:
        boundary = to_boundary_error(exc)
        if boundary.status_class is not StatusClass.INTERNAL_ERROR:
            logger.warning(
                "domain_error",
                variant=exc.variant,
                status=boundary.status_code,
                error_message=boundary.message,
            )
            return _respond(boundary)

        # Full message (possibly with driver text) stays server side
        logger.error(
            "domain_error",
            variant=exc.variant,
            status=boundary.status_code,
            error_message=boundary.message,
            exc_info=exc,
        )
        sentry_sdk.capture_exception(exc)
        if not cfg.expose_internal_errors:
            boundary = BoundaryError(StatusClass.INTERNAL_ERROR, INTERNAL_ERROR_MESSAGE)
        return _respond(boundary)

    return _handler


def _http_exception_handler(_: Request, exc: HTTPException) -> JSONResponse:
    # Routing errors such as 405 are folded onto the same six status classes
    boundary = BoundaryError(status_class_for_http(exc.status_code), str(exc.detail))
    return JSONResponse(
        status_code=boundary.status_code,
        content=boundary.to_body(),
        headers=getattr(exc, "headers", None),
    )


def _validation_exception_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    # Field-level details are not part of the error contract
    logger.info("request_validation_failed", errors=len(exc.errors()))
    return _respond(BoundaryError(StatusClass.BAD_REQUEST, "Invalid request body"))


def _unconverted_storage_handler(_: Request, exc: Exception) -> JSONResponse:
    # A repository failure that skipped its service's conversion point
    logger.error("unconverted_storage_error", error_type=type(exc).__name__, exc_info=exc)
    sentry_sdk.capture_exception(exc)
    return _respond(BoundaryError(StatusClass.INTERNAL_ERROR, INTERNAL_ERROR_MESSAGE))


def _unhandled_exception_handler(_: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled_exception", error_type=type(exc).__name__, exc_info=exc)
    return _respond(BoundaryError(StatusClass.INTERNAL_ERROR, INTERNAL_ERROR_MESSAGE))


def install(app: FastAPI, cfg: Settings | None = None) -> None:
    # Register centralized exception handlers
    cfg = cfg or settings
    app.add_exception_handler(DomainError, _domain_error_handler(cfg))
    app.add_exception_handler(HTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(PersistenceError, _unconverted_storage_handler)
    app.add_exception_handler(SQLAlchemyError, _unconverted_storage_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
