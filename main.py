"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

import uvicorn
from anyio import to_thread
from ddtrace import patch_all
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from dependencies import get_config, get_publisher
from exceptions import ConfigurationError, EventPublishError, UploadValidationError
from logging_config import setup_logging
from response_models import ErrorResponse
from routes import health_router, keywords_router, payload_router, transcribe_router

logger = setup_logging()
patch_all()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    publisher = get_publisher()
    try:
        await to_thread.run_sync(publisher.connect)
    except EventPublishError:
        logger.warning("Starting without message bus connection")

    try:
        yield
    finally:
        await to_thread.run_sync(publisher.disconnect)


def _error(status_code: int, error: str, message: str | None = None) -> JSONResponse:
    body = ErrorResponse(error=error, message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


async def upload_validation_handler(request: Request, exc: UploadValidationError):
    logger.info(
        "Upload rejected", extra={"error": exc.message, "detail": exc.detail}
    )
    return _error(400, exc.message, exc.detail)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return _error(400, "Invalid request", str(exc))


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error", extra={"url_path": request.url.path})
    return _error(500, "Server error", str(exc))


def create_app() -> FastAPI:
    """Builds the application; refuses to when required settings are missing."""
    config = get_config()
    try:
        config.validate_required()
    except ConfigurationError:
        logger.error(
            "ASSEMBLYAI_API_KEY environment variable is required",
        )
        raise

    app = FastAPI(title="Voice Command Service", lifespan=lifespan)
    app.add_exception_handler(UploadValidationError, upload_validation_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(transcribe_router)
    app.include_router(health_router)
    app.include_router(keywords_router)
    app.include_router(payload_router)
    return app


app = create_app()


if __name__ == "__main__":
    _config = get_config()
    logger.info(
        "Transcription server starting",
        extra={"host": _config.server.host, "port": _config.server.port},
    )
    uvicorn.run(app, host=_config.server.host, port=_config.server.port)
