"""Abstract interface for transcription service operations."""

from abc import ABC, abstractmethod
from pathlib import Path

from transcription_gateway.domain.models import TranscriptionResult


class TranscriptionService(ABC):
    """Abstract base class for speech-to-text backends."""

    @abstractmethod
    def transcribe(
        self, audio_path: Path, filename: str, content_type: str
    ) -> TranscriptionResult:
        """
        Transcribes an audio file.

        Args:
            audio_path: Location of the audio on the local filesystem.
            filename: Original name of the uploaded file.
            content_type: MIME type of the audio.

        Returns:
            The recognized text.

        Raises:
            BackendError: If the backend fails or cannot be reached.
        """

    def close(self) -> None:
        """Releases any connections held by the service."""
