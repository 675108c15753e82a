"""Application configuration loaded from environment variables."""

import os

from pydantic import BaseModel

from exceptions import ConfigurationError

DEFAULT_TRIGGER_PHRASES = ("help", "help utopia", "help eutopia")


class ServerConfig(BaseModel, frozen=True):
    """HTTP server configuration."""

    host: str = "0.0.0.0"
    port: int = 3001


class AssemblyAIConfig(BaseModel, frozen=True):
    """AssemblyAI API configuration."""

    api_key: str
    language_code: str = "en_us"
    timeout_seconds: float = 120.0
    poll_interval_seconds: float = 3.0
    max_submit_attempts: int = 3


class RabbitMQConfig(BaseModel, frozen=True):
    """RabbitMQ connection configuration. An empty host disables publishing."""

    host: str = ""
    user: str = ""
    password: str = ""
    exchange_name: str = "events"
    topic_prefix: str = "eutopia"
    publish_decisions: bool = False


class UploadConfig(BaseModel, frozen=True):
    """Accepted upload types and limits."""

    max_file_size: int = 25 * 1024 * 1024
    allowed_mime_types: tuple[str, ...] = ("audio/wav",)
    allowed_extensions: tuple[str, ...] = (".wav",)


class DirectoriesConfig(BaseModel, frozen=True):
    """Filesystem roots for temporary uploads and transcription logs."""

    uploads: str = "./uploads"
    logs: str = "./transcription_logs"


class TriggerConfig(BaseModel, frozen=True):
    """Phrases that turn a transcript into a YES command."""

    phrases: tuple[str, ...] = DEFAULT_TRIGGER_PHRASES


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    server: ServerConfig
    assemblyai: AssemblyAIConfig
    rabbitmq: RabbitMQConfig
    upload: UploadConfig
    directories: DirectoriesConfig
    triggers: TriggerConfig

    def validate_required(self) -> None:
        """Raises ConfigurationError when a setting the service cannot run without is absent."""
        if not self.assemblyai.api_key:
            raise ConfigurationError("ASSEMBLYAI_API_KEY")


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_phrases(name: str) -> tuple[str, ...]:
    value = os.getenv(name)
    if not value:
        return DEFAULT_TRIGGER_PHRASES
    return tuple(p.strip() for p in value.split(",") if p.strip())


def load_config() -> AppConfig:
    """Loads configuration from environment variables."""
    return AppConfig(
        server=ServerConfig(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "3001")),
        ),
        assemblyai=AssemblyAIConfig(
            api_key=os.getenv("ASSEMBLYAI_API_KEY")
            or os.getenv("ASSEMBLY_AI_API_KEY", ""),
            timeout_seconds=float(os.getenv("TRANSCRIPTION_TIMEOUT_SECONDS", "120")),
        ),
        rabbitmq=RabbitMQConfig(
            host=os.getenv("RABBITMQ_HOST", ""),
            user=os.getenv("RABBITMQ_USER", ""),
            password=os.getenv("RABBITMQ_PASSWORD", ""),
            topic_prefix=os.getenv("TOPIC_PREFIX", "eutopia"),
            publish_decisions=_env_bool("PUBLISH_DECISIONS", False),
        ),
        upload=UploadConfig(
            max_file_size=int(os.getenv("MAX_FILE_SIZE", str(25 * 1024 * 1024))),
        ),
        directories=DirectoriesConfig(
            uploads=os.getenv("UPLOADS_DIR", "./uploads"),
            logs=os.getenv("LOGS_DIR", "./transcription_logs"),
        ),
        triggers=TriggerConfig(phrases=_env_phrases("TRIGGER_PHRASES")),
    )
