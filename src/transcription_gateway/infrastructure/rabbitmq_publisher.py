"""RabbitMQ implementation of the EventPublisher interface."""

import logging
import queue
import threading
from collections.abc import Callable

import pika
from pika.exceptions import AMQPError, ProbableAuthenticationError

from transcription_gateway.config import RabbitMQConfig
from transcription_gateway.domain.models import ProcessingState
from transcription_gateway.exceptions import EventPublishError
from transcription_gateway.interfaces import EventPublisher

logger = logging.getLogger(__name__)

_STOP = object()


class RabbitMQPublisher(EventPublisher):
    """
    Publishes state and transcript events to a RabbitMQ topic exchange.

    Callers only enqueue. A single background thread owns the blocking
    connection, since pika connections must not be shared between threads.
    Delivery is at-most-once: transient messages, no confirms, and a message
    whose publish fails is not retried.
    """

    _IDLE_POLL_SECONDS = 1.0

    def __init__(
        self,
        config: RabbitMQConfig,
        connection_factory: Callable[[pika.URLParameters], pika.BlockingConnection] = (
            pika.BlockingConnection
        ),
    ):
        self._config = config
        self._connection_factory = connection_factory
        self._parameters = pika.URLParameters(config.url)
        if config.user:
            self._parameters.credentials = pika.PlainCredentials(
                config.user, config.password or ""
            )
        self._properties = pika.BasicProperties(
            content_type="text/plain",
            delivery_mode=pika.DeliveryMode.Transient,
        )
        self._queue: queue.Queue = queue.Queue(maxsize=config.max_pending)
        self._stopping = threading.Event()
        self._thread: threading.Thread | None = None
        self._connection = None
        self._channel = None
        self._was_connected = False

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(
            target=self._run, name="rabbitmq-publisher", daemon=True
        )
        self._thread.start()
        logger.info(
            "RabbitMQ publisher started",
            extra={"host": self._parameters.host, "exchange": self._config.exchange_name},
        )

    def close(self, timeout: float = 5.0) -> None:
        self._stopping.set()
        if self._thread is None:
            self._disconnect()
            return
        try:
            self._queue.put(_STOP, timeout=timeout)
        except queue.Full:
            logger.warning("Publish queue still full at shutdown")
        self._thread.join(timeout)
        if self._thread.is_alive():
            logger.warning("RabbitMQ publisher did not stop in time")
        self._thread = None

    def publish_state(self, state: ProcessingState) -> None:
        if not self._config.publish_state:
            return
        self._enqueue(self._config.state_topic, state.value)

    def publish_text(self, text: str) -> None:
        self._enqueue(self._config.text_topic, text)

    def _enqueue(self, routing_key: str, body: str) -> None:
        if self._stopping.is_set():
            raise EventPublishError(routing_key, RuntimeError("publisher is closed"))
        try:
            self._queue.put_nowait((routing_key, body))
        except queue.Full:
            logger.warning(
                "Publish queue full, dropping message",
                extra={"routing_key": routing_key},
            )

    def _run(self) -> None:
        while True:
            if not self._ensure_connected():
                if self._stopping.wait(self._config.reconnect_delay):
                    break
                continue

            try:
                item = self._queue.get(timeout=self._IDLE_POLL_SECONDS)
            except queue.Empty:
                if self._stopping.is_set():
                    break
                self._service_connection()
                continue

            if item is _STOP:
                break
            routing_key, body = item
            self._send(routing_key, body)

        self._disconnect()
        logger.info("RabbitMQ publisher stopped")

    def _ensure_connected(self) -> bool:
        if self._channel is not None and self._channel.is_open:
            return True

        self._disconnect()
        if self._was_connected:
            logger.info("Reconnecting to RabbitMQ", extra={"host": self._parameters.host})

        try:
            self._connection = self._connection_factory(self._parameters)
            self._channel = self._connection.channel()
            self._channel.exchange_declare(
                exchange=self._config.exchange_name,
                exchange_type="topic",
                durable=True,
            )
        except ProbableAuthenticationError:
            logger.error(
                "RabbitMQ authentication failed",
                extra={"host": self._parameters.host, "username": self._config.user},
            )
            self._disconnect()
            return False
        except (AMQPError, OSError) as e:
            logger.warning(
                "RabbitMQ connection failed",
                extra={
                    "host": self._parameters.host,
                    "retry_in": self._config.reconnect_delay,
                    "error": repr(e),
                },
            )
            self._disconnect()
            return False

        self._was_connected = True
        logger.info(
            "Connected to RabbitMQ",
            extra={"host": self._parameters.host, "exchange": self._config.exchange_name},
        )
        return True

    def _send(self, routing_key: str, body: str) -> None:
        try:
            self._channel.basic_publish(
                exchange=self._config.exchange_name,
                routing_key=routing_key,
                body=body.encode("utf-8"),
                properties=self._properties,
            )
            logger.info(
                "Event published",
                extra={
                    "exchange": self._config.exchange_name,
                    "routing_key": routing_key,
                },
            )
        except (AMQPError, OSError):
            logger.exception(
                "RabbitMQ publish failed, message dropped",
                extra={"routing_key": routing_key},
            )
            self._disconnect()

    def _service_connection(self) -> None:
        """Processes heartbeats and notices a dropped connection while idle."""
        try:
            self._connection.process_data_events(time_limit=0)
        except (AMQPError, OSError) as e:
            logger.warning("RabbitMQ connection lost", extra={"error": repr(e)})
            self._disconnect()

    def _disconnect(self) -> None:
        connection = self._connection
        self._connection = None
        self._channel = None
        if connection is None or not connection.is_open:
            return
        try:
            connection.close()
        except (AMQPError, OSError) as e:
            logger.debug("Error while closing RabbitMQ connection", extra={"error": repr(e)})
