"""Request and response models for the voice-command API."""

from pydantic import BaseModel, Field

from domain import Decision


class TranscribeResponse(BaseModel):
    """Command returned for an uploaded audio file."""

    success: bool
    command: Decision


class ErrorResponse(BaseModel):
    """Body of 4xx/5xx responses."""

    success: bool = False
    error: str
    message: str | None = None


class HealthResponse(BaseModel, populate_by_name=True):
    """Liveness report, including message bus connectivity."""

    status: str = "OK"
    message: str
    mqtt_connected: bool = Field(alias="mqttConnected")


class KeywordsRequest(BaseModel):
    """Replacement list of trigger phrases."""

    phrases: list[str] = Field(min_length=1)


class KeywordsResponse(BaseModel):
    """Trigger phrases currently in effect."""

    phrases: list[str]
