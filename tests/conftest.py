import numpy as np
import pytest

from config import WIDTH, HEIGHT
from env import GameSession, Grid
from scheduler import Scheduler


class RecordingSurface:
    """Поверхность, которая просто запоминает вызовы"""

    def __init__(self, width=WIDTH, height=HEIGHT):
        self.width = width
        self.height = height
        self.calls = []

    def fill_rect(self, x, y, width, height, color):
        self.calls.append(("rect", x, y, width, height, color))

    def fill_circle(self, center_x, center_y, radius, color):
        self.calls.append(("circle", center_x, center_y, radius, color))

    def clear(self):
        self.calls.append(("clear",))

    def draw_text(self, text, x, y, size, color, align="left"):
        self.calls.append(("text", text, x, y, size, color, align))

    def texts(self):
        return [call[1] for call in self.calls if call[0] == "text"]

    def kinds(self):
        return [call[0] for call in self.calls]


class FakeClock:
    def __init__(self, now=0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, ms):
        self.now += ms


class FakeScoreService:
    def __init__(self, records=None, fail=None):
        self.records = list(records or [])
        self.submitted = []
        self.fail = fail

    def submit_score(self, username, score, difficulty):
        if self.fail:
            raise self.fail
        self.submitted.append((username, score, difficulty))

    def fetch_top_scores(self):
        if self.fail:
            raise self.fail
        return list(self.records)


@pytest.fixture
def surface():
    return RecordingSurface()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler(clock):
    return Scheduler(clock)


@pytest.fixture
def grid():
    return Grid()


@pytest.fixture
def session(grid):
    return GameSession(grid, rng=np.random.default_rng(0))
