import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from cipher_identifier.api.v1.router import api_router
from cipher_identifier.core.config import Settings, get_settings
from cipher_identifier.core.exceptions import (
    CipherIdentifierError,
    IdentificationNotFoundError,
    UnknownCipherError,
    ValidationError,
)
from cipher_identifier.core.logging import configure_logging
from cipher_identifier.db.session import build_engine, build_sessionmaker, init_db
from cipher_identifier.models.schemas import ErrorResponse
from cipher_identifier.services.pipeline.identifier import CipherIdentifier
from cipher_identifier.services.profiles.metadata import CipherCatalog

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown."""
    settings: Settings = app.state.settings

    # Startup
    app.state.identifier = CipherIdentifier.from_settings(settings)
    app.state.catalog = CipherCatalog.load_or_empty(settings.cipher_types_path)

    engine = build_engine(settings.database_url, echo=settings.debug)
    app.state.sessionmaker = build_sessionmaker(engine)
    await init_db(engine)
    logger.info("%s ready (%s)", settings.app_name, settings.app_env)

    yield

    # Shutdown
    await engine.dispose()


def _error_response(status_code: int, error: str, message: str, details=None) -> JSONResponse:
    body = ErrorResponse(error=error, message=message, details=details or {})
    return JSONResponse(status_code=status_code, content=body.model_dump())


def register_exception_handlers(app: FastAPI) -> None:
    """Translate errors into the ErrorResponse shape."""

    @app.exception_handler(CipherIdentifierError)
    async def identifier_error_handler(request: Request, exc: CipherIdentifierError):
        if isinstance(exc, (UnknownCipherError, IdentificationNotFoundError)):
            status_code = status.HTTP_404_NOT_FOUND
        elif isinstance(exc, ValidationError):
            status_code = status.HTTP_400_BAD_REQUEST
        else:
            status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
            logger.error("Request failed: %s", exc.message)
        return _error_response(status_code, type(exc).__name__, exc.message, exc.details)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return _error_response(exc.status_code, "HTTPException", str(exc.detail))


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or get_settings()
    configure_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        description=(
            "Classical Cipher Identification API. "
            "Fingerprint ciphertexts with statistical tests and rank "
            "the cipher families that most likely produced them."
        ),
        version="0.1.0",
        openapi_url=f"{settings.api_v1_prefix}/openapi.json",
        docs_url=f"{settings.api_v1_prefix}/docs",
        redoc_url=f"{settings.api_v1_prefix}/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.is_development else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include API router
    app.include_router(api_router, prefix=settings.api_v1_prefix)

    return app


def run(host: str = "0.0.0.0", port: int = 8000) -> None:
    """Run the application with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "cipher_identifier.main:create_app",
        factory=True,
        host=host,
        port=port,
        reload=settings.is_development,
    )


if __name__ == "__main__":
    run()
