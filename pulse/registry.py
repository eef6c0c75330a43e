"""PulseRegistry — process-wide catalog of live pulses for bulk shutdown."""

from __future__ import annotations

import atexit
import logging
import threading
import weakref
from typing import TYPE_CHECKING

from pulse.config import settings

if TYPE_CHECKING:
    from collections.abc import Iterator

    from pulse.core import Pulse

logger = logging.getLogger(__name__)


class PulseRegistry:
    """Tracks pulse instances without keeping them alive.

    Instances register themselves on construction. ``stop_all()`` calls
    ``stop()`` on every instance still referenced elsewhere.
    """

    def __init__(self) -> None:
        self._pulses: weakref.WeakSet[Pulse] = weakref.WeakSet()
        self._lock = threading.Lock()
        self._exit_hook_installed = False

    def register(self, pulse: Pulse) -> None:
        """Add a pulse to the registry."""
        with self._lock:
            self._pulses.add(pulse)
            if settings.stop_on_exit and not self._exit_hook_installed:
                atexit.register(self.stop_all)
                self._exit_hook_installed = True

    def __len__(self) -> int:
        with self._lock:
            return len(self._pulses)

    def __iter__(self) -> Iterator[Pulse]:
        with self._lock:
            return iter(list(self._pulses))

    def stop_all(self) -> None:
        """Stop every registered pulse."""
        pulses = list(self)
        stopped = sum(1 for pulse in pulses if pulse.stop())
        logger.info("Stopped %d of %d registered pulse(s)", stopped, len(pulses))


pulse_registry = PulseRegistry()


def stop_all_pulses() -> None:
    """Stop every pulse registered in this process."""
    pulse_registry.stop_all()
