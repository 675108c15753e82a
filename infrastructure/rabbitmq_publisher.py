"""RabbitMQ implementation of the EventPublisher interface."""

import threading

import pika
from pika.adapters.blocking_connection import BlockingChannel

from config import RabbitMQConfig
from exceptions import EventPublishError
from logging_config import setup_logging

from .interfaces import EventPublisher

logger = setup_logging()


class RabbitMQPublisher(EventPublisher):
    """
    Publishes commands to a RabbitMQ topic exchange.

    Messages are routed as ``<topic_prefix>.<topic>``. A BlockingConnection
    channel is not thread-safe, so publishes are serialized with a lock.
    """

    def __init__(self, config: RabbitMQConfig):
        self._config = config
        self._connection: pika.BlockingConnection | None = None
        self._channel: BlockingChannel | None = None
        self._lock = threading.Lock()

    @property
    def is_connected(self) -> bool:
        return (
            self._connection is not None
            and self._connection.is_open
            and self._channel is not None
            and self._channel.is_open
        )

    @property
    def enabled(self) -> bool:
        return bool(self._config.host)

    def connect(self) -> None:
        if not self.enabled:
            logger.info("No RabbitMQ host configured, publishing disabled")
            return

        credentials = pika.PlainCredentials(self._config.user, self._config.password)
        parameters = pika.ConnectionParameters(
            host=self._config.host,
            credentials=credentials,
            heartbeat=0,
        )
        try:
            with self._lock:
                self._connection = pika.BlockingConnection(parameters)
                self._channel = self._connection.channel()
                self._channel.exchange_declare(
                    exchange=self._config.exchange_name,
                    exchange_type="topic",
                    durable=True,
                )
            logger.info(
                "Connected to RabbitMQ",
                extra={
                    "host": self._config.host,
                    "exchange": self._config.exchange_name,
                },
            )
        except Exception as e:
            logger.exception(
                "RabbitMQ connection failed", extra={"host": self._config.host}
            )
            self._connection = None
            self._channel = None
            raise EventPublishError(self._config.topic_prefix, e) from e

    def disconnect(self) -> None:
        with self._lock:
            connection = self._connection
            self._connection = None
            self._channel = None
        if connection is not None and connection.is_open:
            connection.close()
            logger.info("RabbitMQ connection closed")

    def routing_key(self, topic: str) -> str:
        return f"{self._config.topic_prefix}.{topic}"

    def publish(self, topic: str, message: str) -> bool:
        routing_key = self.routing_key(topic)

        if not self.is_connected:
            logger.error(
                "RabbitMQ not connected, cannot publish message",
                extra={"routing_key": routing_key, "body": message},
            )
            return False

        try:
            with self._lock:
                self._channel.basic_publish(
                    exchange=self._config.exchange_name,
                    routing_key=routing_key,
                    body=message.encode("utf-8"),
                )
            logger.info(
                "Event published to RabbitMQ",
                extra={
                    "exchange": self._config.exchange_name,
                    "routing_key": routing_key,
                    "body": message,
                },
            )
            return True
        except Exception as e:
            logger.exception(
                "RabbitMQ publish failed",
                extra={"routing_key": routing_key},
            )
            raise EventPublishError(routing_key, e) from e


def publish_decision(publisher: EventPublisher, command: str) -> None:
    """Fire-and-forget publish of a command; failures are only logged."""
    try:
        publisher.publish("command", command)
    except EventPublishError:
        logger.warning("Command was not published", extra={"command": command})
