"""Abstract interface for transcription service operations."""

from abc import ABC, abstractmethod

from domain.models import TranscriptResult


class TranscriptionService(ABC):
    """Abstract base class for speech-to-text backends."""

    @abstractmethod
    def transcribe(self, file_path: str) -> TranscriptResult:
        """
        Transcribes a local audio file.

        Args:
            file_path: Path of the audio file on local disk.

        Returns:
            The completed transcript with provider metadata.

        Raises:
            TranscriptionError: If the provider reports an error, cannot be
                reached, or does not finish in time.
        """
        pass
