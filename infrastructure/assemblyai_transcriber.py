"""AssemblyAI implementation of the TranscriptionService interface."""

import os
import time

import assemblyai as aai
import httpx
from tenacity import (
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_random_exponential,
)
from tenacity.wait import wait_base

from domain.models import TranscriptResult
from exceptions import TranscriptionError, TranscriptionTimeoutError
from logging_config import setup_logging

from .interfaces import TranscriptionService

logger = setup_logging()

_FINAL_STATUSES = (aai.TranscriptStatus.completed, aai.TranscriptStatus.error)


def build_transcription_config(language_code: str = "en_us") -> aai.TranscriptionConfig:
    """Fixed recognition settings: one locale, punctuation and formatting, no extra analyses."""
    return aai.TranscriptionConfig(
        language_code=language_code,
        punctuate=True,
        format_text=True,
        auto_highlights=False,
        sentiment_analysis=False,
        entity_detection=False,
    )


class AssemblyAITranscriber(TranscriptionService):
    """Handles audio transcription using AssemblyAI."""

    def __init__(
        self,
        transcriber: aai.Transcriber,
        timeout_seconds: float = 120.0,
        max_submit_attempts: int = 3,
        retry_wait: wait_base | None = None,
    ):
        self._transcriber = transcriber
        self._timeout_seconds = timeout_seconds
        self._max_submit_attempts = max_submit_attempts
        self._retry_wait = retry_wait or wait_random_exponential(multiplier=0.5, max=5)

    def transcribe(self, file_path: str) -> TranscriptResult:
        """
        Transcribes a local audio file using AssemblyAI.

        Submits the file, then polls the provider until the transcript is
        completed or failed, giving up after the configured timeout.
        """
        file_name = os.path.basename(file_path)
        logger.info("Processing audio file", extra={"file_name": file_name})

        try:
            transcript = self._submit(file_path)
            transcript = self._wait_for_completion(transcript, file_name)

            if transcript.status == aai.TranscriptStatus.error:
                raise TranscriptionError(file_name, Exception(transcript.error))

            result = TranscriptResult(
                text=transcript.text or "",
                confidence=transcript.confidence,
                language_code=self._language_code(transcript),
                audio_duration=transcript.audio_duration,
                transcript_id=transcript.id,
                status="completed",
            )

        except TranscriptionError:
            logger.exception(
                "AssemblyAI transcription failed", extra={"file_name": file_name}
            )
            raise
        except Exception as e:
            logger.exception(
                "AssemblyAI transcription failed", extra={"file_name": file_name}
            )
            raise TranscriptionError(file_name, e) from e

        logger.info(
            "Audio transcription successful",
            extra={
                "file_name": file_name,
                "transcript_id": result.transcript_id,
                "audio_duration": result.audio_duration,
            },
        )
        return result

    def _submit(self, file_path: str) -> aai.Transcript:
        """Uploads the file and queues it, retrying transport failures only."""
        for attempt in Retrying(
            retry=retry_if_exception_type(httpx.TransportError),
            stop=stop_after_attempt(self._max_submit_attempts),
            wait=self._retry_wait,
            before_sleep=self._log_retry,
            reraise=True,
        ):
            with attempt:
                return self._transcriber.submit(file_path)

    def _wait_for_completion(
        self, transcript: aai.Transcript, file_name: str
    ) -> aai.Transcript:
        if transcript.status in _FINAL_STATUSES:
            return transcript

        started = time.monotonic()
        try:
            return transcript.wait_for_completion(poll_timeout=self._timeout_seconds)
        except aai.TranscriptError as e:
            # Same error type for HTTP failures; only a spent budget is a timeout.
            if time.monotonic() - started < self._timeout_seconds:
                raise
            raise TranscriptionTimeoutError(file_name, self._timeout_seconds) from e

    @staticmethod
    def _language_code(transcript: aai.Transcript) -> str | None:
        json_response = getattr(transcript, "json_response", None) or {}
        return json_response.get("language_code")

    @staticmethod
    def _log_retry(retry_state) -> None:
        logger.warning(
            "AssemblyAI submit failed, retrying",
            extra={
                "attempt": retry_state.attempt_number,
                "error": str(retry_state.outcome.exception()),
            },
        )
