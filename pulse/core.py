"""Pulse — a recurring callback aligned to an absolute interval grid."""

from __future__ import annotations

import asyncio
import inspect
import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from pulse.errors import FatalHookError
from pulse.metadata import PulseMeta, create_metadata
from pulse.registry import pulse_registry
from pulse.validation import valid, valid_range

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

MIN_INTERVAL_MS = 10
MAX_INTERVAL_MS = 2**31 - 1


def _wall_clock_ms() -> float:
    return time.time() * 1000


def _noop(*args: Any) -> None:
    return None


async def _settle(value: Any) -> Any:
    """Await *value* if it is awaitable, otherwise return it as-is."""
    if inspect.isawaitable(value):
        return await value
    return value


@dataclass
class PulseOptions:
    """Construction options for :class:`Pulse`.

    Attributes:
        on_pulse: Required. ``(pulse, context)`` called on every cycle; may be async.
        interval: Required. Grid period in whole milliseconds, 10 to 2**31 - 1.
        offset: Grid shift in whole milliseconds, ``0 <= offset < interval``.
        get_now: Time source returning milliseconds (wall clock by default).
        on_error: Called when ``on_pulse`` fails. ``(pulse, context)`` normally,
            ``(pulse, error, id)`` in ``no_meta`` mode.
        after_pulse: ``(pulse, context)`` called after every cycle; a failure
            here stops the pulse for good.
        on_start: ``(pulse)`` called when the pulse starts.
        on_stop: ``(pulse)`` called when the pulse is stopped.
        auto_start: Start immediately after construction.
        no_meta: Pass the bare cycle id instead of a :class:`PulseMeta`.
        loop: Event loop for the timer; the running loop is used when omitted.
    """

    on_pulse: Callable[..., Any] | None = None
    interval: int | None = None
    offset: int | None = None
    get_now: Callable[[], float] | None = None
    on_error: Callable[..., Any] | None = None
    after_pulse: Callable[..., Any] | None = None
    on_start: Callable[..., Any] | None = None
    on_stop: Callable[..., Any] | None = None
    auto_start: bool | None = None
    no_meta: bool | None = None
    loop: asyncio.AbstractEventLoop | None = None


class Pulse:
    """Fires a callback at every ``k * interval + offset`` ms of the time source.

    Each delay is recomputed from the current time, so a slow cycle never
    shifts later ones off the grid. Cycles of one instance never overlap.

    Args:
        options: A :class:`PulseOptions`. Every field is validated before the
            instance is built; a malformed option raises a
            ``ConfigurationError`` subclass.
    """

    def __init__(self, options: PulseOptions | None = None) -> None:
        options = options or PulseOptions()

        self._on_pulse = valid("callable", options.on_pulse, True, "options.on_pulse")
        self._interval = valid_range(
            MIN_INTERVAL_MS,
            MAX_INTERVAL_MS,
            options.interval,
            True,
            "options.interval",
            kind="integer",
        )
        offset = valid_range(
            0,
            self._interval,
            options.offset,
            False,
            "options.offset",
            inclusive_max=False,
            kind="integer",
        )
        self._offset = offset or 0
        self._get_now = valid("callable", options.get_now, False, "options.get_now") or _wall_clock_ms
        self._on_error = valid("callable", options.on_error, False, "options.on_error") or _noop
        self._after_pulse = (
            valid("callable", options.after_pulse, False, "options.after_pulse") or _noop
        )
        self._on_start = valid("callable", options.on_start, False, "options.on_start") or _noop
        self._on_stop = valid("callable", options.on_stop, False, "options.on_stop") or _noop
        auto_start = valid("boolean", options.auto_start, False, "options.auto_start") or False
        self._no_meta = valid("boolean", options.no_meta, False, "options.no_meta") or False
        self._loop = options.loop

        self._state = False
        self._next_id = 0
        self._current: PulseMeta | int | None = None
        self._last: Any = None
        self._timer: asyncio.TimerHandle | None = None
        self._timer_loop: asyncio.AbstractEventLoop | None = None
        self._task: asyncio.Task | None = None

        pulse_registry.register(self)
        if auto_start:
            self.start()

    def __repr__(self) -> str:
        return (
            f"Pulse(interval={self._interval}, offset={self._offset}, "
            f"state={self._state}, next_id={self._next_id})"
        )

    # -- Observables -------------------------------------------------------------

    @property
    def state(self) -> bool:
        """True while running."""
        return self._state

    @property
    def last(self) -> Any:
        """Context of the last completed cycle (its result in no_meta mode)."""
        return self._last

    @property
    def interval(self) -> int:
        return self._interval

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def next_id(self) -> int:
        return self._next_id

    @property
    def no_meta(self) -> bool:
        return self._no_meta

    @property
    def busy(self) -> bool:
        """True while a cycle is in flight."""
        return self._current is not None

    # -- Lifecycle ---------------------------------------------------------------

    def start(self, reset_first: bool = False) -> bool:
        """Start the loop. Returns False if it was already running.

        Raises ``RuntimeError`` without changing state when no event loop was
        configured and none is running.
        """
        if self._state:
            return False
        self._timer_loop = self._resolve_loop()
        self._on_start(self)
        if reset_first:
            self._next_id = 0
        self._state = True
        logger.info("Pulse started (interval=%sms, offset=%sms)", self._interval, self._offset)
        self._plan()
        return True

    def stop(self, reset_after: bool = False) -> bool:
        """Stop the loop. Returns False if it was already stopped.

        A cycle already in flight runs to completion but does not re-arm.
        """
        if not self._state:
            return False
        self._cancel_timer()
        self._state = False
        if reset_after:
            self._next_id = 0
        logger.info("Pulse stopped (next_id=%d)", self._next_id)
        self._on_stop(self)
        return True

    def reset(self) -> bool:
        """Zero the cycle counter without touching timers or cycles in flight."""
        self._next_id = 0
        return True

    def restart(self, reset: bool = False) -> bool:
        """Stop then start again, optionally zeroing the counter."""
        self.stop(reset)
        return self.start(reset)

    # -- Scheduling --------------------------------------------------------------

    def _delay_ms(self) -> float:
        now = self._get_now()
        return (self._interval - now % self._interval) + self._offset

    def _plan(self) -> None:
        """Arm the one-shot timer for the next grid point."""
        if not self._state or self._current is not None:
            return
        self._cancel_timer()
        delay = self._delay_ms()
        loop = self._timer_loop or self._resolve_loop()
        self._timer_loop = loop
        self._timer = loop.call_later(delay / 1000, self._fire)
        logger.debug("Pulse #%d armed in %sms", self._next_id, delay)

    def _resolve_loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is not None:
            return self._loop
        try:
            return asyncio.get_running_loop()
        except RuntimeError as err:
            msg = "Pulse.start() needs a running event loop or options.loop"
            raise RuntimeError(msg) from err

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _fire(self) -> None:
        """Timer callback: run one cycle as a task on the timer's loop."""
        self._timer = None
        loop = self._timer_loop or asyncio.get_running_loop()
        self._task = loop.create_task(self._run())
        self._task.add_done_callback(self._cycle_done)

    def _cycle_done(self, task: asyncio.Task) -> None:
        if self._task is task:
            self._task = None
        if task.cancelled():
            return
        exc = task.exception()
        if exc is None:
            return
        task.get_loop().call_exception_handler(
            {
                "message": "Fatal error in pulse cycle",
                "exception": exc,
                "task": task,
            }
        )

    async def _run(self) -> None:
        """Execute one cycle: pulse callback, bookkeeping, hooks, re-arm."""
        if not self._state or self._current is not None:
            return

        pulse_id = self._next_id
        self._next_id += 1
        context: PulseMeta | int = (
            pulse_id if self._no_meta else create_metadata(pulse_id, self._get_now)
        )
        self._current = context

        result: Any = None
        error: Exception | None = None
        fatal: Exception | None = None
        try:
            try:
                result = await _settle(self._on_pulse(self, context))
            except Exception as err:
                error = err
                logger.warning("Pulse #%d callback failed: %s", pulse_id, err)

            if isinstance(context, PulseMeta):
                if error is None:
                    context._resolve(result)
                else:
                    context._reject(error)
                context._end()

            try:
                if error is not None:
                    if self._no_meta:
                        await _settle(self._on_error(self, error, pulse_id))
                    else:
                        await _settle(self._on_error(self, context))
                await _settle(self._after_pulse(self, context))
            except Exception as err:
                fatal = err

            self._last = result if self._no_meta else context
        except asyncio.CancelledError:
            # Forced stop: a cancelled cycle never re-arms and skips on_stop.
            self._cancel_timer()
            self._state = False
            logger.warning("Pulse #%d cancelled mid-cycle, pulse stopped", pulse_id)
            raise
        finally:
            self._current = None

        if fatal is not None:
            # Forced stop: on_stop is deliberately not invoked on this path.
            self._cancel_timer()
            self._state = False
            logger.error("Pulse #%d hook failed, pulse stopped: %s", pulse_id, fatal)
            msg = f"Pulse hook failed during cycle #{pulse_id}: {fatal}"
            raise FatalHookError(msg, pulse=self) from fatal

        logger.debug("Pulse #%d completed", pulse_id)
        self._plan()


def create_pulse(**kwargs: Any) -> Pulse:
    """Build a :class:`Pulse` from keyword options (see :class:`PulseOptions`)."""
    return Pulse(PulseOptions(**kwargs))
