import os
from pathlib import Path
from urllib.parse import urlparse

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from core.exceptions import PlotAreaError
from core.logging_config import setup_logging
from core.settings import get_settings
from services.api.exception_handlers import plotarea_exception_handler
from services.api.middleware import RateLimitMiddleware, SecurityHeadersMiddleware
from services.api.routes import router as v1_router


def _cors_origins(ui_origin: str) -> list[str]:
    allowed_origins: set[str] = {
        ui_origin,
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    }
    parsed = urlparse(ui_origin)
    if parsed.scheme and parsed.netloc:
        # Add both localhost and 127.0.0.1 variants
        if "localhost" in ui_origin:
            allowed_origins.add(ui_origin.replace("localhost", "127.0.0.1"))
        elif "127.0.0.1" in ui_origin:
            allowed_origins.add(ui_origin.replace("127.0.0.1", "localhost"))
    return sorted(allowed_origins)


def create_app() -> FastAPI:
    settings = get_settings()

    # Environment wins over the config file
    json_logging = os.getenv("JSON_LOGGING", str(settings.logging.json_format)).lower() in {"true", "1", "yes"}
    log_level = os.getenv("LOG_LEVEL", settings.logging.level)
    log_file = os.getenv("LOG_FILE")
    setup_logging(
        level=log_level,
        json_format=json_logging,
        log_file=Path(log_file) if log_file else None,
    )

    app = FastAPI(
        title=settings.api.title,
        version="0.1.0",
        description="Triangle area calculation and boundary triangulation for land plots",
    )

    cors_origins = _cors_origins(os.getenv("UI_ORIGIN", settings.api.ui_origin))
    logger.info(f"CORS allowed origins: {cors_origins}")

    rate_limit_env = os.getenv("RATE_LIMIT_ENABLED")
    rate_limit_enabled = (
        rate_limit_env.lower() in {"true", "1", "yes"}
        if rate_limit_env is not None
        else settings.api.rate_limit_enabled
    )
    if rate_limit_enabled:
        app.add_middleware(
            RateLimitMiddleware,
            requests_per_minute=int(os.getenv("RATE_LIMIT_PER_MINUTE", settings.api.requests_per_minute)),
            requests_per_hour=int(os.getenv("RATE_LIMIT_PER_HOUR", settings.api.requests_per_hour)),
        )

    app.add_middleware(SecurityHeadersMiddleware)

    # CORS middleware - add LAST so it executes FIRST
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/healthz", tags=["meta"])
    async def healthcheck() -> dict[str, str]:
        return {"status": "ok"}

    app.add_exception_handler(PlotAreaError, plotarea_exception_handler)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected exceptions with a JSON body."""
        logger.opt(exception=exc).error("Unhandled exception on {path}", path=request.url.path)
        return JSONResponse(
            status_code=500,
            content={
                "error": type(exc).__name__,
                "message": str(exc),
            },
        )

    app.include_router(v1_router)

    logger.info(
        "API initialised with default unit={unit}",
        unit=settings.calculation.default_unit.value,
    )
    return app


app = create_app()


__all__ = ["app", "create_app"]
