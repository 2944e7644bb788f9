"""Periodic callback scheduling driven by elapsed time.

The controller never reaches for a global timer.  It asks a scheduler to call
``tick`` every ``interval_ms`` and keeps the returned handle so the stream can
be cancelled on restart or game over.  :class:`FrameScheduler` is advanced
explicitly by whoever owns the clock: the pygame loop feeds it the frame
delta, tests feed it whatever time they like.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Protocol

Callback = Callable[[], None]


class Scheduler(Protocol):
    def schedule_interval(self, callback: Callback, interval_ms: float) -> int:
        ...

    def cancel(self, handle: int) -> None:
        ...


@dataclass
class _Interval:
    callback: Callback
    interval_ms: float
    elapsed_ms: float = 0.0


class FrameScheduler:
    """Fire periodic callbacks as time is pushed in through :meth:`advance`."""

    def __init__(self) -> None:
        self._intervals: Dict[int, _Interval] = {}
        self._next_handle = 1

    @property
    def active_count(self) -> int:
        """Number of periodic callbacks currently scheduled."""

        return len(self._intervals)

    def schedule_interval(self, callback: Callback, interval_ms: float) -> int:
        """Call ``callback`` once every ``interval_ms`` and return its handle.

        Raises:
            ValueError: If ``interval_ms`` is not positive.
        """

        if interval_ms <= 0:
            raise ValueError(f"Interval must be positive, got {interval_ms}")
        handle = self._next_handle
        self._next_handle += 1
        self._intervals[handle] = _Interval(callback, float(interval_ms))
        return handle

    def cancel(self, handle: int) -> None:
        """Stop the callback registered under ``handle``.

        Unknown or already cancelled handles are ignored.
        """

        self._intervals.pop(handle, None)

    def advance(self, elapsed_ms: float) -> int:
        """Let ``elapsed_ms`` pass and return how many callbacks fired.

        A callback fires once per full interval accumulated, so a large step
        may fire the same callback several times.  A callback cancelled while
        time is being advanced, including by itself, does not fire again.
        """

        if elapsed_ms < 0:
            raise ValueError(f"Elapsed time must not be negative, got {elapsed_ms}")
        fired = 0
        for handle in list(self._intervals):
            interval = self._intervals.get(handle)
            if interval is None:
                continue
            interval.elapsed_ms += elapsed_ms
            while handle in self._intervals and interval.elapsed_ms >= interval.interval_ms:
                interval.elapsed_ms -= interval.interval_ms
                interval.callback()
                fired += 1
        return fired
