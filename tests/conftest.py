"""
Shared fixtures: a controllable clock and scheduler
"""
import pytest
from models.recipe import Recipe, Step


class ManualClock:
    """Clock that only moves when told to"""

    def __init__(self, start: float = 1_000.0):
        self.current = start

    def __call__(self) -> float:
        return self.current

    def advance(self, seconds: float):
        self.current += seconds


class ManualSubscription:
    def __init__(self, interval, callback):
        self.interval = interval
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class ManualScheduler:
    """Fires every live subscription once per fire() call"""

    def __init__(self):
        self.subscriptions = []

    def schedule_every(self, interval, callback):
        subscription = ManualSubscription(interval, callback)
        self.subscriptions.append(subscription)
        return subscription

    @property
    def live(self):
        return [s for s in self.subscriptions if not s.cancelled]

    def fire(self):
        for subscription in list(self.subscriptions):
            if not subscription.cancelled:
                subscription.callback()


class RecordingAlertSink:
    def __init__(self):
        self.calls = []

    def timer_completed(self, step_key, instruction):
        self.calls.append((step_key, instruction))


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def alert_sink():
    return RecordingAlertSink()


@pytest.fixture
def three_steps():
    """Durations [0, 120, 0]"""
    return [
        Step(order_index=0, instruction="Wash the rice", duration_seconds=0),
        Step(order_index=1, instruction="Simmer the stew", duration_seconds=120),
        Step(order_index=2, instruction="Serve", duration_seconds=0),
    ]


@pytest.fixture
def sample_recipe(three_steps):
    return Recipe(id=1, name="Jollof Rice", description="test", steps=three_steps)
