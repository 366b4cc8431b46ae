"""Pytest configuration for Bagel test suite."""

import io
import sys
from pathlib import Path

import pytest

# Add src directory to path for bagel imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from bagel.session import Session  # noqa: E402


@pytest.fixture
def out() -> io.StringIO:
    """Output sink standing in for stdout."""
    return io.StringIO()


@pytest.fixture
def session(out: io.StringIO) -> Session:
    return Session(out)
