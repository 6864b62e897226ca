"""Codepad FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from codepad import __version__
from codepad.config import Settings, settings
from codepad.services import init_services, shutdown_services
from codepad.services.errors import (
    CodepadError,
    DuplicateNameError,
    InvalidNameError,
    NotFoundError,
    UploadError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: list[tuple[type[CodepadError], int]] = [
    (DuplicateNameError, 409),
    (InvalidNameError, 422),
    (NotFoundError, 404),
    (UploadError, 400),
]


def _setup_logging(config: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # Noisy third-party loggers auf WARNING setzen
    for noisy in ("sqlalchemy.engine", "multipart", "python_multipart"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


async def _codepad_error_handler(request: Request, exc: CodepadError) -> JSONResponse:
    status_code = 400
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            status_code = code
            break
    body: dict[str, Any] = {"detail": exc.message}
    if isinstance(exc, UploadError) and exc.failed_files:
        body["failed_files"] = exc.failed_files
    return JSONResponse(status_code=status_code, content=body)


def create_app(config: Settings | None = None) -> FastAPI:
    """Application factory — one file store per app instance."""
    from codepad.api.routes import api_router

    config = config or settings

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        # === STARTUP ===
        _setup_logging(config)
        Path(config.data_dir).mkdir(parents=True, exist_ok=True)

        init_services(app.state, config)
        logger.info(
            "Codepad v%s started — listening on %s:%s", __version__, config.host, config.port
        )

        try:
            yield
        finally:
            # === SHUTDOWN ===
            shutdown_services(app.state)
            logger.info("Codepad shutting down")

    app = FastAPI(
        title=config.app_name,
        version=__version__,
        debug=config.debug,
        lifespan=_lifespan,
    )

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(CodepadError, _codepad_error_handler)
    app.include_router(api_router, prefix=config.api_prefix)
    return app


app = create_app()


def run(**kwargs: Any) -> None:
    import uvicorn

    uvicorn.run(
        "codepad.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
        **kwargs,
    )


if __name__ == "__main__":
    run()
