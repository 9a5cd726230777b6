"""Tests for the Whisper backend client.

The backend is simulated with httpx.MockTransport so requests can be
inspected without a network.
"""

import httpx
import pytest

from transcription_gateway.config import WhisperConfig
from transcription_gateway.exceptions import BackendError
from transcription_gateway.infrastructure import WhisperTranscriber
from transcription_gateway.infrastructure.whisper_transcriber import parse_transcription


@pytest.fixture
def audio_file(tmp_path):
    path = tmp_path / "upload-abc"
    path.write_bytes(b"RIFF-fake-wave")
    return path


def _transcriber(handler, **config):
    client = httpx.Client(transport=httpx.MockTransport(handler))
    return WhisperTranscriber(client, WhisperConfig(**config))


class TestRequest:
    def test_sends_multipart_with_query_parameters(self, audio_file):
        seen = {}

        def handler(request: httpx.Request):
            seen["request"] = request
            seen["body"] = request.read()
            return httpx.Response(200, json={"text": "hi"})

        transcriber = _transcriber(
            handler, url="http://asr:9000/asr", language="de", audio_field="audio_file"
        )
        transcriber.transcribe(audio_file, "clip.wav", "audio/wav")

        request = seen["request"]
        assert request.method == "POST"
        assert request.url.host == "asr"
        assert request.url.path == "/asr"
        assert dict(request.url.params) == {
            "task": "transcribe",
            "language": "de",
            "output": "json",
        }
        assert request.headers["content-type"].startswith("multipart/form-data")
        body = seen["body"]
        assert b'name="audio_file"; filename="clip.wav"' in body
        assert b"Content-Type: audio/wav" in body
        assert b"RIFF-fake-wave" in body

    def test_uses_configured_field_name(self, audio_file):
        seen = {}

        def handler(request):
            seen["body"] = request.read()
            return httpx.Response(200, json={"text": ""})

        _transcriber(handler, audio_field="file").transcribe(audio_file, "a.mp3", "audio/mpeg")

        assert b'name="file"; filename="a.mp3"' in seen["body"]


class TestResponse:
    def test_returns_text_from_json(self, audio_file):
        transcriber = _transcriber(
            lambda request: httpx.Response(200, json={"text": " Hello world ", "language": "en"})
        )

        result = transcriber.transcribe(audio_file, "clip.wav", "audio/wav")

        assert result.text == " Hello world "

    def test_plain_text_response_is_used_as_transcript(self, audio_file):
        transcriber = _transcriber(lambda request: httpx.Response(200, text="hello\n"))

        result = transcriber.transcribe(audio_file, "clip.wav", "audio/wav")

        assert result.text == "hello"

    def test_non_success_status_raises_backend_error(self, audio_file):
        transcriber = _transcriber(
            lambda request: httpx.Response(500, text="CUDA out of memory")
        )

        with pytest.raises(BackendError) as exc_info:
            transcriber.transcribe(audio_file, "clip.wav", "audio/wav")

        assert exc_info.value.status_code == 500
        assert exc_info.value.detail == "CUDA out of memory"
        assert str(exc_info.value) == "Transcription backend error 500: CUDA out of memory"

    def test_connection_failure_raises_backend_error(self, audio_file):
        def handler(request):
            raise httpx.ConnectError("Connection refused", request=request)

        with pytest.raises(BackendError) as exc_info:
            _transcriber(handler).transcribe(audio_file, "clip.wav", "audio/wav")

        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.cause, httpx.ConnectError)
        assert "Connection refused" in str(exc_info.value)


class TestParseTranscription:
    @pytest.mark.parametrize(
        "body, expected",
        [
            ('{"text": "hi there"}', "hi there"),
            ('{"text": null}', ""),
            ('{"segments": []}', ""),
            ('{"text": 42}', "42"),
            ('"quoted"', ""),
            ("[1, 2]", ""),
            ("  plain words  ", "plain words"),
            ("", ""),
        ],
    )
    def test_never_raises(self, body, expected):
        assert parse_transcription(body).text == expected


def test_close_closes_http_client():
    client = httpx.Client(transport=httpx.MockTransport(lambda request: httpx.Response(200)))
    WhisperTranscriber(client, WhisperConfig()).close()

    assert client.is_closed
