"""Shared pytest fixtures."""

from pathlib import Path

import pytest
import structlog

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture(autouse=True)
def reset_structlog():
    """Restore the default structlog configuration after each test."""
    yield
    structlog.reset_defaults()


@pytest.fixture(scope="session")
def buffer_rings():
    """Open rings produced by buffering, keyed by what makes them special."""
    rings = {}
    for line in (DATA_DIR / "buffer_rings.tsv").read_text().splitlines():
        name, text = line.split("\t")
        rings[name] = [tuple(float(v) for v in point.split()) for point in text.split(",")]
    return rings
