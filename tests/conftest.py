"""Pytest configuration.

Qt widgets are tested headless: the offscreen platform is selected before
pytest-qt creates the QApplication. Core modules (utils, models, geometry,
animation math) need no application at all.
"""

import os

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


class FakeClock:
    """Manually advanced millisecond clock for animation tests."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = float(start)

    def advance(self, ms: float) -> float:
        self.now += ms
        return self.now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sample_series():
    """Threat levels, as shown in the gallery example."""
    return [
        ("Low", 12),
        ("Medium", 40),
        ("High", 7),
        ("Critical", 3),
    ]
