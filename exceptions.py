"""Custom exceptions for the voice-command service."""


class ConfigurationError(Exception):
    """Raised when required configuration is missing at startup."""

    def __init__(self, setting: str):
        self.setting = setting
        super().__init__(f"Missing required setting '{setting}'")


class UploadValidationError(Exception):
    """Raised when an uploaded file is missing, of the wrong type or too large."""

    def __init__(self, message: str, detail: str | None = None):
        self.message = message
        self.detail = detail
        super().__init__(message)


class TranscriptionError(Exception):
    """Raised when the speech-to-text provider fails to transcribe a file."""

    def __init__(self, file_name: str, cause: Exception | None = None):
        self.file_name = file_name
        self.cause = cause
        message = f"Failed to transcribe audio file '{file_name}'"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class TranscriptionTimeoutError(TranscriptionError):
    """Raised when the provider does not finish within the configured timeout."""

    def __init__(self, file_name: str, timeout_seconds: float):
        self.timeout_seconds = timeout_seconds
        super().__init__(
            file_name,
            TimeoutError(f"no result after {timeout_seconds:g}s"),
        )


class StorageError(Exception):
    """Describes a failed filesystem operation on the logs or uploads tree."""

    def __init__(self, path: str, cause: Exception | None = None):
        self.path = path
        self.cause = cause
        super().__init__(f"Storage operation failed for '{path}': {cause}")


class EventPublishError(Exception):
    """Raised when publishing an event to the message broker fails."""

    def __init__(self, routing_key: str, cause: Exception | None = None):
        self.routing_key = routing_key
        self.cause = cause
        super().__init__(f"Failed to publish event with routing key '{routing_key}'")
