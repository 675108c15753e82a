"""Synthetic payload endpoint used to probe device download throughput."""

from fastapi import APIRouter
from fastapi.responses import JSONResponse, PlainTextResponse

from logging_config import setup_logging
from response_models import ErrorResponse

logger = setup_logging()

router = APIRouter(tags=["payload"])

MAX_BYTES = 1_000_000


def _bad_request(error: str) -> JSONResponse:
    return JSONResponse(status_code=400, content=ErrorResponse(error=error).model_dump(exclude_none=True))


@router.get("/bytes")
def generate_bytes(size: str | None = None):
    """Returns ``size`` bytes of ``A`` as plain text."""
    logger.info("Byte payload requested", extra={"requested_size": size})

    if not size:
        return _bad_request("Missing required query parameter: size")

    try:
        num_bytes = int(size)
    except ValueError:
        return _bad_request("Invalid size parameter. Must be a non-negative integer.")

    if num_bytes < 0:
        return _bad_request("Invalid size parameter. Must be a non-negative integer.")

    if num_bytes > MAX_BYTES:
        return _bad_request(f"Size parameter too large. Maximum allowed: {MAX_BYTES}")

    return PlainTextResponse("A" * num_bytes)
