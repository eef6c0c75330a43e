"""Shared test fixtures."""

from unittest.mock import MagicMock

import pytest

from pulse.registry import PulseRegistry


@pytest.fixture
def timer_loop() -> MagicMock:
    """Stand-in event loop that records ``call_later`` requests."""
    return MagicMock()


@pytest.fixture
def registry(monkeypatch: pytest.MonkeyPatch) -> PulseRegistry:
    """Isolate pulse registration in a fresh registry."""
    reg = PulseRegistry()
    monkeypatch.setattr("pulse.core.pulse_registry", reg)
    monkeypatch.setattr("pulse.registry.pulse_registry", reg)
    return reg
