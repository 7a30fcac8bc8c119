"""Pytest configuration and fixtures."""

from __future__ import annotations

import io
import sys
from pathlib import Path

import pytest

# Project root
PROJECT_ROOT = Path(__file__).parent.parent

# Add src to the Python path for runs without an editable install
SRC_DIR = PROJECT_ROOT / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from cmdkit.config import Config, LogLevel  # noqa: E402
from cmdkit.console import Console  # noqa: E402

FIXTURES_DIR = Path(__file__).parent / "fixtures"
FAKE_TOOL_PATH = FIXTURES_DIR / "fake_tool.py"


@pytest.fixture
def fake_tool_argv() -> list[str]:
    """argv prefix that runs the fake tool with the current interpreter."""
    return [sys.executable, str(FAKE_TOOL_PATH)]


@pytest.fixture
def console_stream() -> io.StringIO:
    """Buffer that captures Console output."""
    return io.StringIO()


@pytest.fixture
def console(console_stream: io.StringIO) -> Console:
    """Console at INFO writing into console_stream."""
    return Console(Config(log_level=LogLevel.INFO), stream=console_stream)
