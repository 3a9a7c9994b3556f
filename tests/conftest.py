"""Pytest configuration and fixtures for timeline-converter tests."""

import json

from pathlib import Path
from typing import Any

import pytest


def pytest_configure(config):
    """Register custom test markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests that do not require external dependencies"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests combining multiple components"
    )


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep config and log files inside the test's temporary directory."""
    from timeline_converter import config, logging_config

    app_dir = tmp_path / "app"
    monkeypatch.setattr(config, "get_config_path", lambda: app_dir / "config.toml")
    monkeypatch.setattr(logging_config, "DEFAULT_LOG_DIR", app_dir / "logs")

    yield app_dir

    logging_config.reset_logging()


@pytest.fixture
def parser_registry():
    """Return a fresh registry with the built-in parsers, in detection order."""
    from timeline_converter.parsers.legacy import LegacyTimelineParser
    from timeline_converter.parsers.registry import ParserRegistry
    from timeline_converter.parsers.segment_array import SegmentArrayParser
    from timeline_converter.parsers.segment_object import SegmentObjectParser

    registry = ParserRegistry()
    registry.register(SegmentArrayParser())
    registry.register(SegmentObjectParser())
    registry.register(LegacyTimelineParser())
    return registry


@pytest.fixture
def write_json(tmp_path):
    """Factory writing a JSON document (or raw text) into an input file."""
    input_dir = tmp_path / "inputs"
    input_dir.mkdir()

    def _write(name: str, content: Any, raw: bool = False) -> Path:
        path = input_dir / name
        text = content if raw else json.dumps(content, ensure_ascii=False)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
