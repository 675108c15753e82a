"""Abstract interface for durable file storage operations."""

from abc import ABC, abstractmethod

from domain.models import StorageResult, TimestampedFolder, TranscriptionRecord


class StorageClient(ABC):
    """
    Abstract base class for the transcription logs store.

    Operations report failures through the returned StorageResult instead of
    raising, so callers decide whether a failed write matters.
    """

    @abstractmethod
    def ensure_directory(self, path: str) -> StorageResult:
        """Creates a directory and its missing parents; no-op if it exists."""

    @abstractmethod
    def create_timestamped_folder(
        self, base_dir: str, prefix: str
    ) -> TimestampedFolder:
        """
        Creates ``base_dir/<prefix>_<timestamp>``.

        Returns:
            The folder path and the timestamp used to name it.

        Raises:
            StorageError: If the folder cannot be created.
        """

    @abstractmethod
    def move_file(self, source: str, destination: str) -> StorageResult:
        """Moves a file, atomically where the filesystem allows it."""

    @abstractmethod
    def remove_file(self, path: str) -> StorageResult:
        """Deletes a file if it still exists."""

    @abstractmethod
    def save_record(self, record: TranscriptionRecord, file_path: str) -> StorageResult:
        """Writes one record to its own JSON file, replacing any existing file."""

    @abstractmethod
    def append_to_log(self, record: TranscriptionRecord, log_path: str) -> StorageResult:
        """Appends one record to the cumulative JSON array file."""
