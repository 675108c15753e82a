"""Infrastructure layer exports."""

from .assemblyai_transcriber import AssemblyAITranscriber
from .local_storage import CumulativeLog, LocalFileStorage
from .rabbitmq_publisher import RabbitMQPublisher

__all__ = [
    "AssemblyAITranscriber",
    "CumulativeLog",
    "LocalFileStorage",
    "RabbitMQPublisher",
]
