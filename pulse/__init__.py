"""Recurring callbacks aligned to an absolute interval grid."""

from pulse.config import PulseSettings, configure_logging, settings
from pulse.core import Pulse, PulseOptions, create_pulse
from pulse.errors import (
    ConfigurationError,
    FatalHookError,
    PulseError,
    RangeError,
    TypeMismatchError,
    TypeRequiredError,
)
from pulse.metadata import PulseMeta, create_metadata
from pulse.registry import PulseRegistry, pulse_registry, stop_all_pulses
from pulse.validation import valid, valid_range

__all__ = [
    "ConfigurationError",
    "FatalHookError",
    "Pulse",
    "PulseError",
    "PulseMeta",
    "PulseOptions",
    "PulseRegistry",
    "PulseSettings",
    "RangeError",
    "TypeMismatchError",
    "TypeRequiredError",
    "configure_logging",
    "create_metadata",
    "create_pulse",
    "pulse_registry",
    "settings",
    "stop_all_pulses",
    "valid",
    "valid_range",
]

__version__ = "0.1.0"
