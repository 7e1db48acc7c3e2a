from __future__ import annotations

import time
import uuid
from collections.abc import Callable

import sentry_sdk
import structlog
from fastapi import Request, Response

REQUEST_ID_HEADER = "X-Request-ID"


async def request_id_middleware(request: Request, call_next: Callable) -> Response:
    """Bind a request ID for the duration of the request and log one access line.

    The ID comes from the inbound X-Request-ID header or is generated, is bound
    into structlog contextvars (so error-handler logs carry it), tagged on the
    Sentry scope, and echoed back on the response.
    """
    logger = structlog.get_logger(__name__)
    rid = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
    structlog.contextvars.bind_contextvars(
        request_id=rid, path=request.url.path, method=request.method
    )
    sentry_sdk.set_tag("request_id", rid)

    start = time.perf_counter()
    try:
        response = await call_next(request)
        logger.info(
            "http_request",
            status=response.status_code,
            duration_ms=round((time.perf_counter() - start) * 1000, 3),
        )
        response.headers[REQUEST_ID_HEADER] = rid
        return response
    except Exception:
        logger.error(
            "http_request",
            status=500,
            duration_ms=round((time.perf_counter() - start) * 1000, 3),
            exc_info=True,
        )
        raise
    finally:
        structlog.contextvars.clear_contextvars()
