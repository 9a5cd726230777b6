"""Abstract interfaces for infrastructure dependencies."""

from .event_publisher import EventPublisher
from .transcription_service import TranscriptionService

__all__ = ["EventPublisher", "TranscriptionService"]
