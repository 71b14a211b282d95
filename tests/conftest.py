import pytest

from roda.animation.scheduler import FrameScheduler
from roda.core.events import EventBus


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> float:
        self.now += ms
        return self.now


class ScriptedRandom:
    """Returns queued values from uniform(); falls back to the lower bound."""

    def __init__(self, *values: float):
        self.values = list(values)
        self.calls = []

    def uniform(self, a: float, b: float) -> float:
        self.calls.append((a, b))
        if self.values:
            return self.values.pop(0)
        return a


class RecordingPlayer:
    def __init__(self):
        self.ticks = 0
        self.wins = 0

    def play_wheel_tick(self):
        self.ticks += 1

    def play_win(self):
        self.wins += 1


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler():
    return FrameScheduler()


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def player():
    return RecordingPlayer()


@pytest.fixture
def scripted_random():
    return ScriptedRandom
