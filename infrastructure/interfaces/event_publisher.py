"""Abstract interface for event publishing."""

from abc import ABC, abstractmethod


class EventPublisher(ABC):
    """Abstract base class for message bus publishers."""

    @property
    @abstractmethod
    def is_connected(self) -> bool:
        """Whether the publisher currently holds a live broker connection."""

    @abstractmethod
    def connect(self) -> None:
        """
        Opens the broker connection.

        Raises:
            EventPublishError: If the broker cannot be reached.
        """

    @abstractmethod
    def disconnect(self) -> None:
        """Closes the broker connection if one is open."""

    @abstractmethod
    def publish(self, topic: str, message: str) -> bool:
        """
        Publishes a message under the configured topic prefix.

        Args:
            topic: Topic suffix appended to the prefix.
            message: Message body.

        Returns:
            False when not connected and nothing was sent.

        Raises:
            EventPublishError: If the broker rejects the publish.
        """
