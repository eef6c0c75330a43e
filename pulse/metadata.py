"""PulseMeta — the per-cycle execution context handed to callbacks."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

NowFn = Callable[[], float]


class PulseMeta:
    """Execution context for a single pulse.

    Attributes:
        id: Sequence number of the cycle.
        started: Time-source reading when the cycle began (ms).
        ended: Time-source reading once the outcome was recorded, else None.
        result: Return value of the pulse callback, if it succeeded.
        error: Exception raised by the pulse callback, if it failed.

    ``warnings`` and ``runtime`` are recomputed on every read. Once ``ended``
    is stamped the object no longer changes.
    """

    __slots__ = ("_id", "_started", "_get_now", "_warnings", "_result", "_error", "_settled", "_ended")

    def __init__(self, pulse_id: int, get_now: NowFn) -> None:
        self._id = pulse_id
        self._get_now = get_now
        self._started = get_now()
        self._warnings: list[Any] = []
        self._result: Any = None
        self._error: BaseException | None = None
        self._settled = False
        self._ended: float | None = None

    def __repr__(self) -> str:
        return (
            f"PulseMeta(id={self._id}, started={self._started}, ended={self._ended}, "
            f"failed={self.failed}, warnings={len(self._warnings)})"
        )

    @property
    def id(self) -> int:
        return self._id

    @property
    def started(self) -> float:
        return self._started

    @property
    def ended(self) -> float | None:
        return self._ended

    @property
    def result(self) -> Any:
        return self._result

    @property
    def error(self) -> BaseException | None:
        return self._error

    @property
    def failed(self) -> bool:
        return self._error is not None

    @property
    def warnings(self) -> list[Any]:
        """Snapshot copy of the warnings collected so far."""
        return list(self._warnings)

    @property
    def runtime(self) -> float:
        """Elapsed ms: ``ended - started`` once ended, else ``now - started``."""
        end = self._ended if self._ended is not None else self._get_now()
        return end - self._started

    def warn(self, message: Any) -> None:
        """Attach a warning (a string or an exception) to this pulse."""
        if self._ended is not None:
            logger.debug("Ignoring warning on ended pulse #%d: %s", self._id, message)
            return
        self._warnings.append(message)

    # -- Outcome recording (scheduler only) -------------------------------------

    def _resolve(self, result: Any) -> None:
        self._check_unsettled()
        self._result = result
        self._settled = True

    def _reject(self, error: BaseException) -> None:
        self._check_unsettled()
        self._error = error
        self._settled = True

    def _end(self) -> None:
        if self._ended is not None:
            msg = f"Pulse #{self._id} already ended"
            raise RuntimeError(msg)
        self._ended = self._get_now()

    def _check_unsettled(self) -> None:
        if self._settled:
            msg = f"Pulse #{self._id} outcome already recorded"
            raise RuntimeError(msg)


def create_metadata(pulse_id: int, get_now: NowFn) -> PulseMeta:
    """Build a fresh execution context stamped with ``get_now()``."""
    return PulseMeta(pulse_id, get_now)
