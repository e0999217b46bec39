"""Timer-driven repeat runs that collect a series of analysis results."""

from __future__ import annotations

import threading
from collections.abc import Callable
from dataclasses import dataclass, replace
from time import monotonic
from typing import Protocol

from finger_rom._compat import StrEnum
from finger_rom.analyzer import FrameAnalyzer
from finger_rom.events import AnalysisLogEvent, LogEventKind
from finger_rom.exceptions import SchedulerConfigurationError
from finger_rom.models import AnalysisResult, results_to_json


class SchedulerState(StrEnum):
    """Lifecycle state of :class:`SampleScheduler`."""

    IDLE = "idle"
    RUNNING = "running"


@dataclass(frozen=True, slots=True)
class SchedulerStats:
    """Observable counters for the current or most recent repeat run."""

    ticks_completed: int = 0
    results_appended: int = 0
    frames_skipped: int = 0


class PeriodicTimer(Protocol):
    """Handle to a started periodic timer."""

    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], PeriodicTimer]
"""Start a timer that calls ``callback`` every ``interval_s`` seconds."""


class IntervalTimer:
    """Cancellable periodic timer running callbacks on one daemon thread.

    Deadlines are scheduled from the start time so that slow callbacks do not
    accumulate drift. Callbacks never overlap.
    """

    def __init__(self, interval_s: float, callback: Callable[[], None]) -> None:
        self._interval_s = interval_s
        self._callback = callback
        self._cancelled = threading.Event()
        self._thread = threading.Thread(target=self._run, name="finger-rom-timer", daemon=True)

    @classmethod
    def start_new(cls, interval_s: float, callback: Callable[[], None]) -> IntervalTimer:
        """Create and start a timer; usable as a :data:`TimerFactory`."""
        timer = cls(interval_s, callback)
        timer.start()
        return timer

    def start(self) -> None:
        self._thread.start()

    def cancel(self) -> None:
        """Stop future callbacks. Safe to call from inside the callback."""
        self._cancelled.set()

    def join(self, timeout: float | None = None) -> bool:
        """Wait for the timer thread to exit after :meth:`cancel`.

        :returns:
            ``True`` if the thread has exited.
        """
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def _run(self) -> None:
        deadline = monotonic() + self._interval_s
        while not self._cancelled.wait(max(0.0, deadline - monotonic())):
            self._callback()
            deadline += self._interval_s


class SampleScheduler:
    """Run :meth:`FrameAnalyzer.analyze` on a fixed interval for a fixed count.

    State machine:
    - ``idle``: no timer armed; ticks are ignored.
    - ``running``: timer armed; each tick analyzes once and counts, and the run
      returns to ``idle`` after ``count`` ticks.

    Starting a new run from ``running`` cancels the current timer and replaces
    the series. Results are appended in tick order.
    """

    def __init__(
        self,
        analyzer: FrameAnalyzer,
        *,
        timer_factory: TimerFactory | None = None,
    ) -> None:
        """Create a scheduler.

        :param analyzer:
            Analyzer invoked on each tick. Its configuration supplies default
            count and interval values and the log hook.
        :param timer_factory:
            Optional timer factory for dependency injection. Defaults to
            :meth:`IntervalTimer.start_new`.
        """
        self._analyzer = analyzer
        self._timer_factory = timer_factory or IntervalTimer.start_new
        self._lock = threading.RLock()
        self._idle = threading.Event()
        self._idle.set()
        self._state = SchedulerState.IDLE
        self._results: list[AnalysisResult] = []
        self._count = 0
        self._completed = 0
        self._generation = 0
        self._timer: PeriodicTimer | None = None
        self._stats = SchedulerStats()

    @property
    def state(self) -> SchedulerState:
        return self._state

    @property
    def completed(self) -> int:
        """Ticks completed in the current or most recent run."""
        return self._completed

    @property
    def results(self) -> tuple[AnalysisResult, ...]:
        """Snapshot of the current or most recent result series."""
        with self._lock:
            return tuple(self._results)

    def get_stats(self) -> SchedulerStats:
        """Return a snapshot of counters for the current or most recent run."""
        return self._stats

    def start_repeat(self, count: int | None = None, interval_ms: int | None = None) -> None:
        """Start a repeat run, replacing any run in progress.

        :param count:
            Number of ticks. Defaults to ``AnalyzerConfig.repeat_count``.
        :param interval_ms:
            Tick interval in milliseconds. Defaults to
            ``AnalyzerConfig.repeat_interval_ms``.
        :raises SchedulerConfigurationError:
            If ``count`` or ``interval_ms`` is not positive.
        """
        config = self._analyzer.config
        count = config.repeat_count if count is None else count
        interval_ms = config.repeat_interval_ms if interval_ms is None else interval_ms
        if count <= 0:
            raise SchedulerConfigurationError("count must be greater than 0.")
        if interval_ms <= 0:
            raise SchedulerConfigurationError("interval_ms must be greater than 0.")

        with self._lock:
            self._cancel_timer()
            self._generation += 1
            generation = self._generation
            self._results = []
            self._count = count
            self._completed = 0
            self._stats = SchedulerStats()
            self._state = SchedulerState.RUNNING
            self._idle.clear()
            self._emit_log(
                AnalysisLogEvent(
                    kind=LogEventKind.REPEAT_START,
                    message=f"Repeat analyze start: {count} times",
                )
            )
            self._timer = self._timer_factory(
                interval_ms / 1000.0,
                lambda: self._on_timer(generation),
            )

    def tick(self) -> AnalysisResult | None:
        """Run one scheduled analysis for the current run.

        :returns:
            Result appended by this tick, or ``None`` when the frame was
            missing, skipped, or no run is active.
        :raises ReferenceLengthError:
            When the analyzer uses ``error_policy=strict`` and the frame is
            degenerate. The run is stopped before the error propagates.
        """
        with self._lock:
            if self._state is not SchedulerState.RUNNING:
                return None

            try:
                result = self._analyzer.analyze()
            except Exception:
                self._finish(summary=False)
                raise

            if result is not None:
                self._results.append(result)
                self._stats = replace(
                    self._stats, results_appended=self._stats.results_appended + 1
                )
            else:
                self._stats = replace(self._stats, frames_skipped=self._stats.frames_skipped + 1)

            self._completed += 1
            self._stats = replace(self._stats, ticks_completed=self._completed)
            if self._completed >= self._count:
                self._finish(summary=True)
            return result

    def analyze_now(self) -> AnalysisResult | None:
        """Analyze the current frame outside the timer and append the result.

        Works in either state. The tick count of a running repeat is not
        advanced, and a missing frame leaves the series unchanged.

        :returns:
            Appended result, or ``None`` when no usable frame exists.
        :raises ReferenceLengthError:
            When the analyzer uses ``error_policy=strict`` and the frame is
            degenerate.
        """
        with self._lock:
            result = self._analyzer.analyze()
            if result is not None:
                self._results.append(result)
            return result

    def stop(self) -> None:
        """Cancel the current run without emitting a summary."""
        with self._lock:
            if self._state is SchedulerState.RUNNING:
                self._finish(summary=False)

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the scheduler is idle.

        :param timeout:
            Optional maximum wait in seconds.
        :returns:
            ``True`` if the scheduler is idle, ``False`` on timeout.
        """
        return self._idle.wait(timeout)

    def _on_timer(self, generation: int) -> None:
        with self._lock:
            if generation != self._generation:
                return
            self.tick()

    def _finish(self, *, summary: bool) -> None:
        self._cancel_timer()
        self._state = SchedulerState.IDLE
        if summary:
            results = tuple(self._results)
            self._emit_log(
                AnalysisLogEvent(kind=LogEventKind.REPEAT_FINISHED, message="Repeat analyze finished")
            )
            self._emit_log(
                AnalysisLogEvent(
                    kind=LogEventKind.SUMMARY,
                    message="SUMMARY " + results_to_json(results),
                    results=results,
                )
            )
        self._idle.set()

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _emit_log(self, event: AnalysisLogEvent) -> None:
        log_hook = self._analyzer.config.log_hook
        if log_hook is not None:
            log_hook(event)
