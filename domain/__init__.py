"""Domain layer exports."""

from .command_analyzer import CommandAnalyzer
from .models import (
    CommandOutcome,
    Decision,
    StorageResult,
    TimestampedFolder,
    TranscriptionRecord,
    TranscriptResult,
    UploadedAudio,
)

__all__ = [
    "CommandAnalyzer",
    "CommandOutcome",
    "Decision",
    "StorageResult",
    "TimestampedFolder",
    "TranscriptionRecord",
    "TranscriptResult",
    "UploadedAudio",
]
