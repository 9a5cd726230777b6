"""Component construction and FastAPI dependency injection."""

import httpx
from fastapi import Request

from transcription_gateway.config import AppConfig
from transcription_gateway.handlers import UploadHandler
from transcription_gateway.infrastructure import RabbitMQPublisher, WhisperTranscriber
from transcription_gateway.interfaces import EventPublisher, TranscriptionService


def build_publisher(config: AppConfig) -> EventPublisher:
    """Creates the RabbitMQ publisher. The connection opens on start()."""
    return RabbitMQPublisher(config.rabbitmq)


def build_transcription_service(config: AppConfig) -> TranscriptionService:
    """Creates the Whisper client with its own HTTP connection pool."""
    client = httpx.Client(timeout=httpx.Timeout(config.whisper.timeout))
    return WhisperTranscriber(client, config.whisper)


def build_upload_handler(
    config: AppConfig,
    publisher: EventPublisher,
    transcription_service: TranscriptionService,
) -> UploadHandler:
    """Wires the upload pipeline from its collaborators."""
    return UploadHandler(publisher, transcription_service, config.upload)


def get_upload_handler(request: Request) -> UploadHandler:
    """Returns the upload handler assembled for this application."""
    return request.app.state.upload_handler
