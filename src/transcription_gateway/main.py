"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError

from transcription_gateway import __version__
from transcription_gateway.config import AppConfig, load_config
from transcription_gateway.dependencies import (
    build_publisher,
    build_transcription_service,
    build_upload_handler,
)
from transcription_gateway.interfaces import EventPublisher, TranscriptionService
from transcription_gateway.logging import setup_logging
from transcription_gateway.routes import (
    audio_validation_handler,
    health_router,
    upload_router,
)

logger = logging.getLogger(__name__)


def create_app(
    config: AppConfig | None = None,
    publisher: EventPublisher | None = None,
    transcription_service: TranscriptionService | None = None,
) -> FastAPI:
    """
    Assembles Config -> Publisher -> Transcription Service -> Upload Handler.

    Collaborators that are not passed in are built from the configuration.
    The publisher is started and both collaborators are closed by the app
    lifespan.
    """
    config = config or load_config()
    publisher = publisher or build_publisher(config)
    transcription_service = transcription_service or build_transcription_service(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        publisher.start()
        logger.info(
            "Gateway ready",
            extra={
                "port": config.port,
                "whisper_url": config.whisper.url,
                "text_topic": config.rabbitmq.text_topic,
                "state_topic": config.rabbitmq.state_topic,
            },
        )
        yield
        publisher.close()
        transcription_service.close()

    app = FastAPI(title="Transcription Gateway", version=__version__, lifespan=lifespan)
    app.state.upload_handler = build_upload_handler(config, publisher, transcription_service)
    app.add_exception_handler(RequestValidationError, audio_validation_handler)
    app.include_router(upload_router)
    app.include_router(health_router)
    return app


def main():
    """Runs the gateway under uvicorn."""
    config = load_config()
    setup_logging(config.log_level)
    uvicorn.run(create_app(config), host=config.host, port=config.port, log_config=None)
