"""Health check endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends

from dependencies import get_publisher
from infrastructure.interfaces import EventPublisher
from response_models import HealthResponse

router = APIRouter(tags=["health"])

PublisherDep = Annotated[EventPublisher, Depends(get_publisher)]


@router.get("/health", response_model=HealthResponse)
def health(publisher: PublisherDep) -> HealthResponse:
    return HealthResponse(
        status="OK",
        message="Transcription server is running",
        mqtt_connected=publisher.is_connected,
    )
