"""Domain models for the voice-command service."""

from datetime import datetime, timezone
from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field


class Decision(str, Enum):
    """Command returned to the calling device."""

    YES = "YES"
    NO = "NO"
    ERROR = "ERROR"


class UploadedAudio(BaseModel, frozen=True):
    """An audio file received over HTTP and staged in the uploads directory."""

    original_filename: str
    size: int
    content_type: str | None = None
    temp_path: str


class TranscriptResult(BaseModel, frozen=True):
    """Transcript and metadata reported by the speech-to-text provider."""

    text: str = ""
    confidence: float | None = Field(default=None, ge=0.0, le=1.0)
    language_code: str | None = None
    audio_duration: float | None = None
    transcript_id: str | None = None
    status: Literal["completed", "error"] = "completed"


class TranscriptionRecord(BaseModel, frozen=True, populate_by_name=True):
    """Durable record of one transcription, as written to the logs tree."""

    timestamp: str = Field(
        default_factory=lambda: datetime.now(timezone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z")
    )
    filename: str
    file_size: int = Field(alias="fileSize")
    audio_file_path: str | None = Field(default=None, alias="audioFilePath")
    transcription: str = ""
    confidence: float | None = None
    language: str | None = None
    duration: float | None = None
    transcript_id: str | None = Field(default=None, alias="transcriptId")
    status: str

    @classmethod
    def from_transcript(
        cls,
        upload: UploadedAudio,
        audio_file_path: str | None,
        transcript: TranscriptResult,
    ) -> "TranscriptionRecord":
        """Builds a record from the original upload and the provider result."""
        return cls(
            filename=upload.original_filename,
            file_size=upload.size,
            audio_file_path=audio_file_path,
            transcription=transcript.text,
            confidence=transcript.confidence,
            language=transcript.language_code,
            duration=transcript.audio_duration,
            transcript_id=transcript.transcript_id,
            status=transcript.status,
        )

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class TimestampedFolder(BaseModel, frozen=True):
    """A per-request folder under the logs root and the timestamp naming it."""

    path: str
    timestamp: str


class StorageResult(BaseModel, frozen=True):
    """Outcome of a single storage operation."""

    success: bool
    path: str | None = None
    error: str | None = None


class CommandOutcome(BaseModel, frozen=True):
    """Result of running one upload through the intake pipeline."""

    success: bool
    command: Decision
    transcript: TranscriptResult | None = None
    record_path: str | None = None
    audio_path: str | None = None
