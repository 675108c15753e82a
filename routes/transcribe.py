"""Audio transcription endpoint."""

import os
import time
import uuid
from typing import Annotated

from fastapi import APIRouter, BackgroundTasks, Depends, File, UploadFile

from config import AppConfig, UploadConfig
from dependencies import get_config, get_handler, get_publisher
from domain import UploadedAudio
from exceptions import UploadValidationError
from handlers import AudioUploadHandler
from infrastructure.interfaces import EventPublisher
from infrastructure.rabbitmq_publisher import publish_decision
from logging_config import setup_logging
from response_models import ErrorResponse, TranscribeResponse

logger = setup_logging()

router = APIRouter(tags=["transcription"])

ConfigDep = Annotated[AppConfig, Depends(get_config)]
HandlerDep = Annotated[AudioUploadHandler, Depends(get_handler)]
PublisherDep = Annotated[EventPublisher, Depends(get_publisher)]

CHUNK_SIZE = 1024 * 1024


def _too_large(upload_config: UploadConfig) -> UploadValidationError:
    limit_mb = upload_config.max_file_size // (1024 * 1024)
    return UploadValidationError(
        "File too large", detail=f"Audio file must be smaller than {limit_mb}MB"
    )


def validate_upload(audio: UploadFile, upload_config: UploadConfig) -> None:
    """
    Accepts the file when either its MIME type or its extension is allowed.

    Raises:
        UploadValidationError: On a disallowed type or a declared size over the limit.
    """
    filename = (audio.filename or "").lower()
    type_allowed = audio.content_type in upload_config.allowed_mime_types
    extension_allowed = filename.endswith(tuple(upload_config.allowed_extensions))

    if not (type_allowed or extension_allowed):
        raise UploadValidationError("Invalid file type. Only .wav files are allowed.")

    if audio.size is not None and audio.size > upload_config.max_file_size:
        raise _too_large(upload_config)


def stage_upload(audio: UploadFile, config: AppConfig) -> UploadedAudio:
    """Streams the upload to a uniquely named file in the uploads directory."""
    uploads_dir = config.directories.uploads
    os.makedirs(uploads_dir, exist_ok=True)
    temp_path = os.path.join(
        uploads_dir, f"audio-{int(time.time() * 1000)}-{uuid.uuid4().hex[:9]}.wav"
    )

    size = 0
    try:
        with open(temp_path, "wb") as out:
            while True:
                chunk = audio.file.read(CHUNK_SIZE)
                if not chunk:
                    break
                size += len(chunk)
                if size > config.upload.max_file_size:
                    raise _too_large(config.upload)
                out.write(chunk)
    except BaseException:
        if os.path.exists(temp_path):
            os.unlink(temp_path)
        raise

    return UploadedAudio(
        original_filename=audio.filename or os.path.basename(temp_path),
        size=size,
        content_type=audio.content_type,
        temp_path=temp_path,
    )


@router.post(
    "/transcribe",
    response_model=TranscribeResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
def transcribe(
    background_tasks: BackgroundTasks,
    config: ConfigDep,
    handler: HandlerDep,
    publisher: PublisherDep,
    audio: UploadFile | None = File(default=None),
) -> TranscribeResponse:
    """
    Transcribes an uploaded .wav file and answers with a YES/NO command.

    Transcription failures are answered with 200 and command ERROR.
    """
    logger.info("Transcription request received")

    if audio is None:
        raise UploadValidationError(
            'No audio file provided. Please upload a .wav file using the "audio" field.'
        )

    validate_upload(audio, config.upload)
    upload = stage_upload(audio, config)

    outcome = handler.process(upload)

    if config.rabbitmq.publish_decisions:
        background_tasks.add_task(publish_decision, publisher, outcome.command.value)

    return TranscribeResponse(success=outcome.success, command=outcome.command)
