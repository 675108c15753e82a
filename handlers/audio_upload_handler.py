"""Handler that runs one uploaded audio file through transcription and logging."""

import os

from domain import (
    CommandAnalyzer,
    CommandOutcome,
    Decision,
    StorageResult,
    TimestampedFolder,
    TranscriptionRecord,
    TranscriptResult,
    UploadedAudio,
)
from exceptions import StorageError, TranscriptionError
from infrastructure.interfaces import StorageClient, TranscriptionService
from logging_config import setup_logging

logger = setup_logging()

ALL_TRANSCRIPTIONS_LOG = "all_transcriptions.json"
TRANSCRIPTION_PREFIX = "transcription"
ERROR_PREFIX = "error"


class AudioUploadHandler:
    """Orchestrates transcription, persistence and the YES/NO decision."""

    def __init__(
        self,
        storage: StorageClient,
        transcription_service: TranscriptionService,
        command_analyzer: CommandAnalyzer,
        logs_dir: str,
    ):
        self._storage = storage
        self._transcription_service = transcription_service
        self._command_analyzer = command_analyzer
        self._logs_dir = logs_dir

    @property
    def command_analyzer(self) -> CommandAnalyzer:
        return self._command_analyzer

    @property
    def cumulative_log_path(self) -> str:
        return os.path.join(self._logs_dir, ALL_TRANSCRIPTIONS_LOG)

    def process(self, upload: UploadedAudio) -> CommandOutcome:
        """
        Transcribes a staged upload, stores it under the logs root and decides the command.

        A transcription failure yields an ERROR outcome and the audio is kept
        in an ``error_<timestamp>`` folder. Storage failures are logged and
        never change the outcome. The staged file is gone when this returns.

        Args:
            upload: The validated upload, already written to its temp path.

        Returns:
            CommandOutcome with YES/NO on success, ERROR on transcription failure.
        """
        logger.info(
            "Processing audio upload",
            extra={
                "original_filename": upload.original_filename,
                "size": upload.size,
                "temp_path": upload.temp_path,
            },
        )

        try:
            try:
                transcript = self._transcription_service.transcribe(upload.temp_path)
            except TranscriptionError as e:
                logger.error(
                    "Transcription failed",
                    extra={"temp_path": upload.temp_path, "error": str(e)},
                )
                audio_path = self._preserve_failed_audio(upload)
                return CommandOutcome(
                    success=False, command=Decision.ERROR, audio_path=audio_path
                )

            audio_path, record_path = self._persist(upload, transcript)
            command = self._command_analyzer.analyze(transcript.text)

            logger.info(
                "Audio upload processed",
                extra={
                    "command": command.value,
                    "audio_path": audio_path,
                    "record_path": record_path,
                },
            )
            return CommandOutcome(
                success=True,
                command=command,
                transcript=transcript,
                audio_path=audio_path,
                record_path=record_path,
            )
        finally:
            self._storage.remove_file(upload.temp_path)

    def _persist(
        self, upload: UploadedAudio, transcript: TranscriptResult
    ) -> tuple[str | None, str | None]:
        """Best-effort persistence; returns the stored audio and record paths."""
        self._check(self._storage.ensure_directory(self._logs_dir))

        folder = self._create_folder(TRANSCRIPTION_PREFIX)
        audio_path = None
        record_path = None

        if folder is not None:
            audio_path = self._move_audio(upload, folder)

        record = TranscriptionRecord.from_transcript(upload, audio_path, transcript)

        if folder is not None:
            result = self._storage.save_record(
                record,
                os.path.join(folder.path, f"{TRANSCRIPTION_PREFIX}_{folder.timestamp}.json"),
            )
            if self._check(result):
                record_path = result.path

        self._check(self._storage.append_to_log(record, self.cumulative_log_path))
        return audio_path, record_path

    def _preserve_failed_audio(self, upload: UploadedAudio) -> str | None:
        """Moves the audio of a failed transcription into an error folder."""
        self._check(self._storage.ensure_directory(self._logs_dir))
        folder = self._create_folder(ERROR_PREFIX)
        if folder is None:
            return None

        audio_path = self._move_audio(upload, folder)
        if audio_path:
            logger.info("Audio saved to error folder", extra={"audio_path": audio_path})
        return audio_path

    def _create_folder(self, prefix: str) -> TimestampedFolder | None:
        try:
            return self._storage.create_timestamped_folder(self._logs_dir, prefix)
        except StorageError as e:
            logger.warning(
                "Persistence step failed",
                extra={"path": e.path, "error": str(e)},
            )
            return None

    def _move_audio(self, upload: UploadedAudio, folder: TimestampedFolder) -> str | None:
        destination = os.path.join(folder.path, f"audio_{folder.timestamp}.wav")
        result = self._storage.move_file(upload.temp_path, destination)
        return result.path if self._check(result) else None

    @staticmethod
    def _check(result: StorageResult) -> bool:
        if not result.success:
            logger.warning(
                "Persistence step failed",
                extra={"path": result.path, "error": result.error},
            )
        return result.success
