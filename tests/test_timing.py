import pytest

from gengine2d.timing import FpsLimiter, Timer


class FakeClock:
    def __init__(self, now=0):
        self.now = now

    def __call__(self):
        return self.now


class SleepRecorder:
    def __init__(self):
        self.calls = []

    def __call__(self, ms):
        self.calls.append(ms)


def test_timer_not_started_reports_zero():
    clock = FakeClock(500)
    timer = Timer(clock)
    assert timer.ticks == 0
    assert not timer.started and not timer.paused


def test_timer_counts_from_start():
    clock = FakeClock(100)
    timer = Timer(clock)
    timer.start()
    clock.now = 250
    assert timer.ticks == 250 - 100


def test_timer_pause_freezes_and_unpause_resumes():
    clock = FakeClock(100)
    timer = Timer(clock)
    timer.start()
    clock.now = 300
    timer.pause()
    frozen = timer.ticks
    clock.now = 900
    assert timer.paused
    assert timer.ticks == frozen
    timer.unpause()
    clock.now = 950
    assert timer.ticks == frozen + 50
    assert not timer.paused


def test_timer_pause_ignored_when_not_started():
    timer = Timer(FakeClock(10))
    timer.pause()
    assert not timer.paused


def test_timer_stop_resets():
    clock = FakeClock(0)
    timer = Timer(clock)
    timer.start()
    clock.now = 40
    timer.stop()
    assert timer.ticks == 0
    assert not timer.started


def test_limiter_sleeps_rest_of_budget():
    clock = FakeClock(1000)
    sleeper = SleepRecorder()
    limiter = FpsLimiter(100.0, clock=clock, sleep=sleeper)
    limiter.begin_frame()
    clock.now += 4
    limiter.end_frame()
    assert sleeper.calls == [int(1000 / 100.0 - 4)]


def test_limiter_no_sleep_for_slow_frame():
    clock = FakeClock(0)
    sleeper = SleepRecorder()
    limiter = FpsLimiter(100.0, clock=clock, sleep=sleeper)
    limiter.begin_frame()
    clock.now += 50
    limiter.end_frame()
    assert sleeper.calls == []


def test_limiter_first_frame_reports_default_fps():
    limiter = FpsLimiter(200.0, clock=FakeClock(0), sleep=SleepRecorder())
    limiter.begin_frame()
    assert limiter.end_frame() == 60.0


def test_limiter_average_settles_on_steady_frame_time():
    clock = FakeClock(0)
    limiter = FpsLimiter(1000.0, clock=clock, sleep=SleepRecorder())
    frame_ms = 25
    fps = None
    for _ in range(FpsLimiter.NUM_SAMPLES + 1):
        clock.now += frame_ms
        limiter.begin_frame()
        fps = limiter.end_frame()
    assert fps == pytest.approx(1000 / frame_ms)
    assert limiter.frame_time == frame_ms