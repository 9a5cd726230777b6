"""Application configuration loaded from a key/value file and the environment."""

import logging
import os
from pathlib import Path

from dotenv import dotenv_values
from pydantic import BaseModel

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "app.cfg"


class RabbitMQConfig(BaseModel, frozen=True):
    """RabbitMQ connection and topic configuration."""

    url: str = "amqp://localhost:5672/%2F"
    user: str | None = None
    password: str | None = None
    exchange_name: str = "voice"
    text_topic: str = "voice.text"
    state_topic: str = "voice.state"
    publish_state: bool = True
    reconnect_delay: float = 5.0
    max_pending: int = 1000


class WhisperConfig(BaseModel, frozen=True):
    """Transcription backend configuration."""

    url: str = "http://localhost:9000/asr"
    audio_field: str = "audio_file"
    language: str = "en"
    task: str = "transcribe"
    timeout: float | None = None


class UploadConfig(BaseModel, frozen=True):
    """Temporary storage of uploaded audio."""

    tmp_dir: Path = Path("./tmp")
    delete_temp_files: bool = True


class AppConfig(BaseModel, frozen=True):
    """Root application configuration."""

    host: str = "0.0.0.0"
    port: int = 3333
    log_level: str = "INFO"
    rabbitmq: RabbitMQConfig = RabbitMQConfig()
    whisper: WhisperConfig = WhisperConfig()
    upload: UploadConfig = UploadConfig()


def _read_settings(path: str | os.PathLike) -> dict[str, str | None]:
    """Reads the settings file, letting process environment values win."""
    settings: dict[str, str | None] = {}
    if Path(path).is_file():
        settings.update(dotenv_values(path))
    else:
        logger.warning("Config file not found, using defaults", extra={"path": str(path)})
    settings.update(os.environ)
    return settings


def _pick(settings: dict[str, str | None], **keys: str) -> dict[str, str]:
    """Maps model fields to setting keys, skipping unset or blank values."""
    picked = {}
    for field, key in keys.items():
        value = settings.get(key)
        if value is not None and value.strip() != "":
            picked[field] = value.strip()
    return picked


def load_config(path: str | os.PathLike | None = None) -> AppConfig:
    """
    Loads configuration from a dotenv-style file with environment overrides.

    Args:
        path: Settings file. Defaults to $GATEWAY_CONFIG, then ``app.cfg``.

    Returns:
        The validated, immutable application configuration.

    Raises:
        pydantic.ValidationError: If a value cannot be converted to its type.
    """
    path = path or os.getenv("GATEWAY_CONFIG", DEFAULT_CONFIG_PATH)
    settings = _read_settings(path)

    return AppConfig(
        **_pick(settings, host="APP_HOST", port="APP_PORT", log_level="LOG_LEVEL"),
        rabbitmq=RabbitMQConfig(
            **_pick(
                settings,
                url="RABBITMQ_URL",
                user="RABBITMQ_USER",
                password="RABBITMQ_PASSWORD",
                exchange_name="RABBITMQ_EXCHANGE",
                text_topic="RABBITMQ_TEXT_TOPIC",
                state_topic="RABBITMQ_STATE_TOPIC",
                publish_state="PUBLISH_STATE",
                reconnect_delay="RABBITMQ_RECONNECT_DELAY",
            )
        ),
        whisper=WhisperConfig(
            **_pick(
                settings,
                url="WHISPER_URL",
                audio_field="WHISPER_AUDIO_FIELD",
                language="WHISPER_LANGUAGE",
                timeout="WHISPER_TIMEOUT",
            )
        ),
        upload=UploadConfig(
            **_pick(settings, tmp_dir="TMP_DIR", delete_temp_files="DELETE_TEMP_FILES")
        ),
    )
