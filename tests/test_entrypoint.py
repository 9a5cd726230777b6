"""Tests for the process entry point."""

import importlib
import sys
from pathlib import Path
from unittest.mock import MagicMock, patch


def test_run_enables_tracing_then_starts_gateway(monkeypatch):
    tracing = MagicMock()
    monkeypatch.setitem(sys.modules, "ddtrace.auto", tracing)
    monkeypatch.delitem(sys.modules, "transcription_gateway.__main__", raising=False)

    entrypoint = importlib.import_module("transcription_gateway.__main__")
    with patch.object(entrypoint, "main") as main:
        entrypoint.run()

    main.assert_called_once_with()


def test_main_module_has_no_second_entry_path():
    import transcription_gateway.main as app_module

    assert not hasattr(app_module, "run")
    assert "__main__" not in Path(app_module.__file__).read_text(encoding="utf-8")
