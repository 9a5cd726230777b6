"""Domain models for the transcription gateway."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel


class ProcessingState(str, Enum):
    """Externally observable activity of the gateway."""

    PROCESSING = "processing"
    IDLE = "idle"
    ERROR = "error"


class UploadedAudio(BaseModel, frozen=True):
    """An uploaded audio file materialized in the temp directory."""

    path: Path
    filename: str | None = None
    content_type: str | None = None
    size: int


class TranscriptionResult(BaseModel, frozen=True):
    """Recognized text; empty means no speech was detected."""

    text: str = ""


class GatewayResponse(BaseModel):
    """Response body of the upload endpoint."""

    ok: bool
    text: str | None = None
    error: str | None = None
