"""Shared fixtures and fakes for the transcription gateway tests.

The publisher and transcription service are replaced with in-memory fakes
injected through create_app, so no broker or backend is needed.
"""

import io
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from transcription_gateway.config import AppConfig, UploadConfig
from transcription_gateway.domain.models import ProcessingState, TranscriptionResult
from transcription_gateway.exceptions import BackendError
from transcription_gateway.interfaces import EventPublisher, TranscriptionService
from transcription_gateway.main import create_app


class FakePublisher(EventPublisher):
    """Records every publish call in order as (kind, value) tuples."""

    def __init__(self):
        self.events = []
        self.started = False
        self.closed = False

    def start(self):
        self.started = True

    def close(self):
        self.closed = True

    def publish_state(self, state: ProcessingState):
        self.events.append(("state", state.value))

    def publish_text(self, text: str):
        self.events.append(("text", text))

    @property
    def states(self):
        return [value for kind, value in self.events if kind == "state"]

    @property
    def texts(self):
        return [value for kind, value in self.events if kind == "text"]


class FakeTranscriber(TranscriptionService):
    """Returns a canned result or raises a canned error, recording calls."""

    def __init__(self, text: str = "", error: Exception | None = None):
        self.text = text
        self.error = error
        self.calls = []
        self.seen_files = []
        self.closed = False

    def transcribe(self, audio_path, filename, content_type):
        self.calls.append((Path(audio_path), filename, content_type))
        self.seen_files.append(Path(audio_path).read_bytes())
        if self.error is not None:
            raise self.error
        return TranscriptionResult(text=self.text)

    def close(self):
        self.closed = True


@pytest.fixture
def tmp_upload_dir(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def config(tmp_upload_dir):
    return AppConfig(upload=UploadConfig(tmp_dir=tmp_upload_dir))


@pytest.fixture
def publisher():
    return FakePublisher()


@pytest.fixture
def transcriber():
    return FakeTranscriber(text=" Hello world ")


@pytest.fixture
def client(config, publisher, transcriber):
    app = create_app(config, publisher=publisher, transcription_service=transcriber)
    return TestClient(app)


def make_audio(name="speech.wav", content=b"RIFF....WAVEfmt fake", content_type="audio/wav"):
    """Builds a multipart file tuple for the audio field."""
    return {"audio": (name, io.BytesIO(content), content_type)}


def backend_failure(status_code=503, body="model not loaded"):
    return BackendError(status_code, body)
