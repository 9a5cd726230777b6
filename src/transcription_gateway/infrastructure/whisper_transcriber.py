"""Whisper ASR web service implementation of the TranscriptionService interface."""

import json
import logging
from pathlib import Path

import httpx

from transcription_gateway.config import WhisperConfig
from transcription_gateway.domain.models import TranscriptionResult
from transcription_gateway.exceptions import BackendError
from transcription_gateway.interfaces import TranscriptionService

logger = logging.getLogger(__name__)


def parse_transcription(body: str) -> TranscriptionResult:
    """
    Extracts the recognized text from a backend response body.

    The backend does not always honor ``output=json``, so a body that is not
    JSON is taken as the transcript itself. Valid JSON that is not an object
    carries no ``text`` and yields an empty result. Never raises.
    """
    try:
        data = json.loads(body)
    except ValueError:
        return TranscriptionResult(text=body.strip())

    text = data.get("text") if isinstance(data, dict) else None

    return TranscriptionResult(text="" if text is None else str(text))


class WhisperTranscriber(TranscriptionService):
    """Sends audio to a Whisper ASR web service in a single multipart request."""

    def __init__(self, client: httpx.Client, config: WhisperConfig):
        self._client = client
        self._config = config

    def transcribe(
        self, audio_path: Path, filename: str, content_type: str
    ) -> TranscriptionResult:
        params = {
            "task": self._config.task,
            "language": self._config.language,
            "output": "json",
        }

        try:
            with open(audio_path, "rb") as audio:
                response = self._client.post(
                    self._config.url,
                    params=params,
                    files={self._config.audio_field: (filename, audio, content_type)},
                )
        except httpx.HTTPError as e:
            logger.error(
                "Transcription backend unreachable",
                extra={"url": self._config.url, "error": str(e)},
            )
            raise BackendError(None, str(e) or type(e).__name__, e) from e

        if not response.is_success:
            logger.error(
                "Transcription backend returned an error",
                extra={"url": self._config.url, "status_code": response.status_code},
            )
            raise BackendError(response.status_code, response.text)

        result = parse_transcription(response.text)
        logger.info(
            "Audio transcription successful",
            extra={"file_name": filename, "characters": len(result.text)},
        )
        return result

    def close(self) -> None:
        self._client.close()
