"""Local filesystem implementation of the StorageClient interface."""

import errno
import json
import os
import shutil
import tempfile
import threading
import uuid
from datetime import datetime, timezone

from domain.models import StorageResult, TimestampedFolder, TranscriptionRecord
from exceptions import StorageError
from logging_config import setup_logging

from .interfaces import StorageClient

logger = setup_logging()


def make_timestamp(now: datetime | None = None) -> str:
    """
    Returns a filesystem-safe UTC timestamp such as ``2024-05-01T10-15-30-123Z-a1b2c3``.

    Colons and periods of the ISO form are replaced by dashes and a short
    random suffix keeps two requests in the same millisecond apart.
    """
    now = now or datetime.now(timezone.utc)
    iso = now.isoformat(timespec="milliseconds").replace("+00:00", "Z")
    safe = iso.replace(":", "-").replace(".", "-")
    return f"{safe}-{uuid.uuid4().hex[:6]}"


# Read once at import; os.umask can only be read by setting it.
_UMASK = os.umask(0)
os.umask(_UMASK)


def _write_json_atomic(payload, path: str) -> None:
    """Writes JSON to a sibling temp file and renames it over ``path``."""
    directory = os.path.dirname(os.path.abspath(path))
    fd, tmp_path = tempfile.mkstemp(
        prefix=f".{os.path.basename(path)}.", suffix=".tmp", dir=directory
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as tmp_file:
            json.dump(payload, tmp_file, indent=2)
            tmp_file.flush()
            os.fsync(tmp_file.fileno())
        # mkstemp creates 0600; give records the usual umask-derived mode.
        os.chmod(tmp_path, 0o666 & ~_UMASK)
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.unlink(tmp_path)
        raise


class CumulativeLog:
    """
    Append-only JSON array file shared by all requests.

    Every append for a given path runs under the same lock and finishes with
    an atomic rename, so concurrent appends are never lost and readers only
    ever see a complete array.
    """

    _locks: dict[str, threading.Lock] = {}
    _locks_guard = threading.Lock()

    def __init__(self, path: str):
        self.path = path
        key = os.path.abspath(path)
        with self._locks_guard:
            self._lock = self._locks.setdefault(key, threading.Lock())

    def append(self, entry: dict) -> int:
        """Appends one entry and returns the new number of entries."""
        with self._lock:
            entries = self._load(set_aside_corrupt=True)
            entries.append(entry)
            _write_json_atomic(entries, self.path)
            return len(entries)

    def read(self) -> list[dict]:
        """Returns the entries; an unreadable file reads as empty and is left in place."""
        with self._lock:
            return self._load()

    def _load(self, set_aside_corrupt: bool = False) -> list[dict]:
        if not os.path.exists(self.path):
            return []
        try:
            with open(self.path, encoding="utf-8") as log_file:
                entries = json.load(log_file)
            if not isinstance(entries, list):
                raise ValueError("cumulative log is not a JSON array")
            return entries
        except (OSError, ValueError) as e:
            if not set_aside_corrupt:
                logger.warning(
                    "Unreadable cumulative log",
                    extra={"log_path": self.path, "error": str(e)},
                )
                return []
            corrupt_path = f"{self.path}.corrupt-{make_timestamp()}"
            logger.warning(
                "Unreadable cumulative log, starting a new one",
                extra={"log_path": self.path, "moved_to": corrupt_path, "error": str(e)},
            )
            try:
                os.replace(self.path, corrupt_path)
            except OSError:
                logger.exception(
                    "Could not set aside unreadable cumulative log",
                    extra={"log_path": self.path},
                )
            return []


class LocalFileStorage(StorageClient):
    """Handles durable storage of audio files and transcription records on disk."""

    def ensure_directory(self, path: str) -> StorageResult:
        try:
            os.makedirs(path, exist_ok=True)
            return StorageResult(success=True, path=path)
        except OSError as e:
            logger.exception("Directory creation failed", extra={"path": path})
            return StorageResult(success=False, path=path, error=str(StorageError(path, e)))

    def create_timestamped_folder(
        self, base_dir: str, prefix: str = "transcription"
    ) -> TimestampedFolder:
        timestamp = make_timestamp()
        folder_path = os.path.join(base_dir, f"{prefix}_{timestamp}")
        try:
            os.makedirs(folder_path, exist_ok=True)
        except OSError as e:
            logger.exception("Folder creation failed", extra={"path": folder_path})
            raise StorageError(folder_path, e) from e
        return TimestampedFolder(path=folder_path, timestamp=timestamp)

    def move_file(self, source: str, destination: str) -> StorageResult:
        try:
            try:
                os.replace(source, destination)
            except OSError as e:
                # Cross-device moves cannot be renamed; copy then delete.
                if e.errno != errno.EXDEV:
                    raise
                shutil.move(source, destination)
            logger.info(
                "File moved", extra={"source": source, "destination": destination}
            )
            return StorageResult(success=True, path=destination)
        except OSError as e:
            logger.exception(
                "File move failed",
                extra={"source": source, "destination": destination},
            )
            return StorageResult(
                success=False, path=destination, error=str(StorageError(source, e))
            )

    def remove_file(self, path: str) -> StorageResult:
        try:
            if os.path.exists(path):
                os.unlink(path)
                logger.info("Temp file removed", extra={"path": path})
            return StorageResult(success=True, path=path)
        except OSError as e:
            logger.exception("Temp file removal failed", extra={"path": path})
            return StorageResult(success=False, path=path, error=str(StorageError(path, e)))

    def save_record(self, record: TranscriptionRecord, file_path: str) -> StorageResult:
        try:
            _write_json_atomic(record.to_json_dict(), file_path)
            logger.info("Transcription record saved", extra={"path": file_path})
            return StorageResult(success=True, path=file_path)
        except (OSError, TypeError, ValueError) as e:
            logger.exception("Saving transcription record failed", extra={"path": file_path})
            return StorageResult(
                success=False, path=file_path, error=str(StorageError(file_path, e))
            )

    def append_to_log(self, record: TranscriptionRecord, log_path: str) -> StorageResult:
        try:
            count = CumulativeLog(log_path).append(record.to_json_dict())
            logger.info(
                "Appended to cumulative log",
                extra={"path": log_path, "record_count": count},
            )
            return StorageResult(success=True, path=log_path)
        except (OSError, TypeError, ValueError) as e:
            logger.exception("Appending to cumulative log failed", extra={"path": log_path})
            return StorageResult(
                success=False, path=log_path, error=str(StorageError(log_path, e))
            )

    def read_record(self, file_path: str) -> TranscriptionRecord:
        """
        Loads one record file.

        Raises:
            StorageError: If the file is missing or not a valid record.
        """
        try:
            with open(file_path, encoding="utf-8") as record_file:
                return TranscriptionRecord.model_validate(json.load(record_file))
        except (OSError, ValueError) as e:
            raise StorageError(file_path, e) from e

    def read_log(self, log_path: str) -> list[TranscriptionRecord]:
        return [
            TranscriptionRecord.model_validate(entry)
            for entry in CumulativeLog(log_path).read()
        ]
