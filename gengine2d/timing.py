"""A pausable timer and a frame-rate limiter."""

import time
from collections import deque
from collections.abc import Callable

_EPOCH = time.monotonic()


def monotonic_ms() -> int:
    """Milliseconds elapsed since this module was loaded."""
    return int((time.monotonic() - _EPOCH) * 1000)


def sleep_ms(milliseconds: int) -> None:
    time.sleep(milliseconds / 1000)


class Timer:
    """A stopwatch in milliseconds that can be paused."""

    def __init__(self, clock: Callable[[], int] = monotonic_ms) -> None:
        self._clock = clock
        self._start_ticks = 0
        self._paused_ticks = 0
        self._paused = False
        self._started = False

    def start(self) -> None:
        self._started = True
        self._paused = False
        self._start_ticks = self._clock()

    def stop(self) -> None:
        self._started = False
        self._paused = False

    def pause(self) -> None:
        if self._started and not self._paused:
            self._paused = True
            self._paused_ticks = self._clock() - self._start_ticks

    def unpause(self) -> None:
        if self._paused:
            self._paused = False
            self._start_ticks = self._clock() - self._paused_ticks
            self._paused_ticks = 0

    @property
    def ticks(self) -> int:
        """Elapsed milliseconds, frozen while paused, 0 when stopped."""
        if not self._started:
            return 0
        if self._paused:
            return self._paused_ticks
        return self._clock() - self._start_ticks

    @property
    def started(self) -> bool:
        return self._started

    @property
    def paused(self) -> bool:
        return self._paused


class FpsLimiter:
    """Caps the frame rate and reports the average FPS over recent frames."""

    NUM_SAMPLES = 10

    def __init__(
        self,
        max_fps: float = 60.0,
        clock: Callable[[], int] = monotonic_ms,
        sleep: Callable[[int], None] = sleep_ms,
    ) -> None:
        self.max_fps = max_fps
        self.fps = 0.0
        self.frame_time = 0.0
        self._clock = clock
        self._sleep = sleep
        self._start_ticks = 0
        self._frame_times: deque[float] = deque(maxlen=self.NUM_SAMPLES)
        self._prev_ticks: float | None = None

    def begin_frame(self) -> None:
        self._start_ticks = self._clock()

    def end_frame(self) -> float:
        """Sleep off the rest of the frame budget and return the current FPS."""
        self._calculate_fps()
        frame_ticks = self._clock() - self._start_ticks
        budget = 1000.0 / self.max_fps
        if budget > frame_ticks:
            self._sleep(int(budget - frame_ticks))
        return self.fps

    def _calculate_fps(self) -> None:
        current_ticks = float(self._clock())
        if self._prev_ticks is None:
            self._prev_ticks = current_ticks
        self.frame_time = current_ticks - self._prev_ticks
        self._frame_times.append(self.frame_time)
        self._prev_ticks = current_ticks

        average = sum(self._frame_times) / len(self._frame_times)
        self.fps = 1000.0 / average if average > 0 else 60.0