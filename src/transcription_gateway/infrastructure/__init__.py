"""Concrete implementations of infrastructure interfaces."""

from .rabbitmq_publisher import RabbitMQPublisher
from .whisper_transcriber import WhisperTranscriber

__all__ = ["RabbitMQPublisher", "WhisperTranscriber"]
