"""FastAPI dependency injection configuration."""

import assemblyai as aai

from config import AppConfig, load_config
from domain import CommandAnalyzer
from handlers import AudioUploadHandler
from infrastructure import AssemblyAITranscriber, LocalFileStorage, RabbitMQPublisher
from infrastructure.assemblyai_transcriber import build_transcription_config
from infrastructure.interfaces import EventPublisher, StorageClient, TranscriptionService

_config = load_config()

# AssemblyAI setup
aai.settings.api_key = _config.assemblyai.api_key
aai.settings.polling_interval = _config.assemblyai.poll_interval_seconds
_aai_transcriber = aai.Transcriber(
    config=build_transcription_config(_config.assemblyai.language_code)
)
_transcription_service = AssemblyAITranscriber(
    _aai_transcriber,
    timeout_seconds=_config.assemblyai.timeout_seconds,
    max_submit_attempts=_config.assemblyai.max_submit_attempts,
)

_storage = LocalFileStorage()

# Process-wide; edits through the keywords endpoint are lost on restart.
_command_analyzer = CommandAnalyzer(_config.triggers.phrases)

# RabbitMQ connection is opened by the application lifespan.
_publisher = RabbitMQPublisher(_config.rabbitmq)


def get_config() -> AppConfig:
    """Returns the loaded application configuration."""
    return _config


def get_storage() -> StorageClient:
    """Returns the configured storage client."""
    return _storage


def get_transcription_service() -> TranscriptionService:
    """Returns the configured transcription service."""
    return _transcription_service


def get_command_analyzer() -> CommandAnalyzer:
    """Returns the shared trigger phrase analyzer."""
    return _command_analyzer


def get_publisher() -> EventPublisher:
    """Returns the configured message bus publisher."""
    return _publisher


def get_handler() -> AudioUploadHandler:
    """Returns the configured audio upload handler."""
    return AudioUploadHandler(
        _storage,
        _transcription_service,
        _command_analyzer,
        _config.directories.logs,
    )
