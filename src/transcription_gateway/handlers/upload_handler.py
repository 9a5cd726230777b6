"""Handler for transcribing uploaded audio and publishing the result."""

import logging
import os
import shutil
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager

from fastapi import UploadFile

from transcription_gateway.config import UploadConfig
from transcription_gateway.domain.models import (
    GatewayResponse,
    ProcessingState,
    UploadedAudio,
)
from transcription_gateway.exceptions import EventPublishError, MissingUploadError
from transcription_gateway.interfaces import EventPublisher, TranscriptionService

logger = logging.getLogger(__name__)

AUDIO_FIELD = "audio"
DEFAULT_FILENAME = "audio.wav"
DEFAULT_CONTENT_TYPE = "audio/wav"


class UploadHandler:
    """Orchestrates upload-to-transcription-to-publish for a single request."""

    def __init__(
        self,
        publisher: EventPublisher,
        transcription_service: TranscriptionService,
        config: UploadConfig,
    ):
        self._publisher = publisher
        self._transcription_service = transcription_service
        self._config = config

    def handle(self, upload: UploadFile | None) -> GatewayResponse:
        """
        Transcribes an uploaded audio file and publishes the recognized text.

        Publishes ``processing`` before calling the backend, then ``idle`` on
        success or ``error`` on failure. The temp copy of the upload is removed
        on every exit path unless temp-file deletion is disabled.

        Args:
            upload: The ``audio`` file field of the request, if any.

        Returns:
            ``ok=True`` with the trimmed text, or ``ok=False`` with the error.

        Raises:
            MissingUploadError: If no audio (or an empty file) was uploaded.
        """
        if upload is None or upload.size == 0:
            raise MissingUploadError(AUDIO_FIELD)

        with self._materialized(upload) as audio:
            logger.info(
                "Received upload",
                extra={
                    "file_name": audio.filename,
                    "content_type": audio.content_type,
                    "size": audio.size,
                },
            )
            self._announce(ProcessingState.PROCESSING)

            try:
                result = self._transcription_service.transcribe(
                    audio.path,
                    audio.filename or DEFAULT_FILENAME,
                    audio.content_type or DEFAULT_CONTENT_TYPE,
                )
                text = result.text.strip()
            except Exception as e:
                self._announce(ProcessingState.ERROR)
                logger.exception(
                    "Transcription failed", extra={"file_name": audio.filename}
                )
                return GatewayResponse(ok=False, error=str(e))

            if text:
                self._publish_text(text)
            self._announce(ProcessingState.IDLE)

        return GatewayResponse(ok=True, text=text)

    @contextmanager
    def _materialized(self, upload: UploadFile) -> Iterator[UploadedAudio]:
        """Writes the upload to a unique temp file, removing it on exit."""
        self._config.tmp_dir.mkdir(parents=True, exist_ok=True)
        fd, path = tempfile.mkstemp(prefix="upload-", dir=self._config.tmp_dir)
        try:
            with os.fdopen(fd, "wb") as out:
                shutil.copyfileobj(upload.file, out)
            audio = UploadedAudio(
                path=path,
                filename=upload.filename or None,
                content_type=upload.content_type or None,
                size=os.path.getsize(path),
            )
            yield audio
        finally:
            self._remove(path)

    def _remove(self, path: str) -> None:
        if not self._config.delete_temp_files:
            return
        try:
            os.remove(path)
        except OSError as e:
            logger.warning(
                "Could not delete temp file", extra={"path": path, "error": str(e)}
            )

    def _announce(self, state: ProcessingState) -> None:
        try:
            self._publisher.publish_state(state)
        except EventPublishError:
            logger.warning("State publish failed", extra={"state": state.value})

    def _publish_text(self, text: str) -> None:
        try:
            self._publisher.publish_text(text)
        except EventPublishError:
            logger.warning("Transcript publish failed")
