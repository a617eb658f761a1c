import pytest

from core.point_store import PointStore
from core.scratch_session import ScratchSession
from core.timer_loop import TimerLoop


class FakeClock:
    """Manually advanced clock for driving timers deterministically."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, dt: float) -> float:
        self.now += dt
        return self.now


def run_until_idle(loop: TimerLoop, clock: FakeClock, limit: int = 10000) -> None:
    """Jump the clock from deadline to deadline until no one-shot work is left"""
    for _ in range(limit):
        deadline = loop.next_deadline()
        if deadline is None:
            return
        clock.now = max(clock.now, deadline)
        loop.run_due()
    raise AssertionError("timer loop did not go idle")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def loop(clock):
    return TimerLoop(clock)


@pytest.fixture
def store():
    return PointStore()


@pytest.fixture
def session(clock):
    s = ScratchSession(clock=clock)
    yield s
    s.close()
