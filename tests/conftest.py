# ─────────────────────────────────────────────────────────────────────────────
# Test Fixtures — shared across all tests
# ─────────────────────────────────────────────────────────────────────────────

import json
import logging
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest
import structlog

from structlog_cloudlogging.config import Config, new_development_config, new_production_config
from structlog_cloudlogging.logging_config import configure_logging
from structlog_cloudlogging.sinks import SinkHandler


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Drop handlers installed by configure_logging() and restore structlog defaults."""
    root = logging.getLogger()
    saved_level = root.level
    yield
    for handler in root.handlers[:]:
        if isinstance(handler, SinkHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(saved_level)
    structlog.reset_defaults()


@pytest.fixture
def log_file(tmp_path: Path) -> Path:
    return tmp_path / "app.log"


@pytest.fixture
def read_records(log_file: Path) -> Callable[[], list[dict[str, Any]]]:
    """Parse every JSON line written to log_file so far."""

    def _read() -> list[dict[str, Any]]:
        if not log_file.exists():
            return []
        return [json.loads(line) for line in log_file.read_text().splitlines() if line]

    return _read


@pytest.fixture
def configure_to_file(log_file: Path, tmp_path: Path) -> Callable[..., Config]:
    """configure_logging() with output redirected to log_file.

    Accepts "production" or "development" plus any Config field overrides.
    """

    def _configure(mode: str = "production", **overrides: Any) -> Config:
        base = new_development_config() if mode == "development" else new_production_config()
        config = Config(
            **{
                **dict(base),
                "output_paths": (str(log_file),),
                "error_output_paths": (str(tmp_path / "errors.log"),),
                **overrides,
            }
        )
        configure_logging(config)
        return config

    return _configure
