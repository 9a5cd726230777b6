"""Domain layer exports."""

from .models import GatewayResponse, ProcessingState, TranscriptionResult, UploadedAudio

__all__ = ["GatewayResponse", "ProcessingState", "TranscriptionResult", "UploadedAudio"]
