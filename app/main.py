import sentry_sdk
import structlog
from fastapi import FastAPI
from sentry_sdk.integrations.starlette import StarletteIntegration
from starlette.middleware.cors import CORSMiddleware

from app.api import errors
from app.api.routers.healthz import router as healthz_router
from app.api.routers.pictures import router as pictures_router
from app.api.routers.users import router as users_router
from app.core.boundary import verify_boundary_mappings
from app.core.config import Settings, settings
from app.logging import setup_logging
from app.middleware.request_id import request_id_middleware


def create_app(cfg: Settings | None = None) -> FastAPI:
    cfg = cfg or settings
    # Initialize structured logging first
    setup_logging(cfg)

    # Every domain error variant must map to a status class before serving
    verify_boundary_mappings()

    # No-op if DSN is missing
    if cfg.sentry_dsn:
        sentry_sdk.init(
            dsn=cfg.sentry_dsn,
            environment=cfg.app_env,
            release=cfg.release,
            integrations=[StarletteIntegration()],
            traces_sample_rate=cfg.sentry_traces_rate,
            send_default_pii=False,
        )

    app = FastAPI(title="koko-pic API")
    app.middleware("http")(request_id_middleware)

    if cfg.origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cfg.origins,
            allow_credentials=True,
            allow_methods=["GET", "POST", "DELETE", "OPTIONS", "HEAD"],
            allow_headers=["*"],
        )

    errors.install(app, cfg)

    app.include_router(users_router)
    app.include_router(pictures_router)
    app.include_router(healthz_router)

    structlog.get_logger(__name__).info("app_startup", env=cfg.app_env)
    return app


app = create_app()
