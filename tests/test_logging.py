"""Tests for structured logging setup."""

import json
import logging

from transcription_gateway.logging import setup_logging


def test_emits_json_with_extra_fields(capsys):
    setup_logging("debug")

    logging.getLogger("transcription_gateway.test").info(
        "Event published", extra={"routing_key": "voice.state"}
    )

    record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
    assert record["message"] == "Event published"
    assert record["levelname"] == "INFO"
    assert record["routing_key"] == "voice.state"


def test_uvicorn_loggers_share_root_handler():
    root = setup_logging()

    uvicorn_logger = logging.getLogger("uvicorn.error")
    assert uvicorn_logger.handlers == root.handlers
    assert uvicorn_logger.propagate is False
