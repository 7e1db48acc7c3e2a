from __future__ import annotations

import logging

import structlog

from app.core.config import Settings, settings


def _resolve_format(cfg: Settings) -> str:
    if cfg.log_format:
        return cfg.log_format.lower()
    return "console" if cfg.app_env == "dev" else "json"


def setup_logging(cfg: Settings | None = None) -> None:
    """Route structlog and stdlib logging through one JSON (or console) renderer.

    - ISO/UTC timestamp, level and event on every line
    - contextvars are merged so request_id bound by the middleware flows into
      service and error-handler logs
    - exc_info is rendered into the event, never sent to clients
    """
    cfg = cfg or settings

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]

    structlog.configure(
        processors=shared_processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if _resolve_format(cfg) == "console":
        renderer = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )
    logging.basicConfig(
        level=getattr(logging, cfg.log_level.upper(), logging.INFO),
        handlers=[handler],
        force=True,
    )
