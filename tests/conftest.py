from datetime import date

import numpy as np
import pytest

from face_attendance.core.session import AttendanceSession
from face_attendance.database.attendance_log import AttendanceLogger

TODAY = date(2024, 3, 4)  # a Monday


class FakeClock:
    def __init__(self, start=0.0):
        self.t = start

    def __call__(self):
        return self.t

    def advance(self, seconds):
        self.t += seconds


class FakeDetector:
    """Returns the same boxes for every image."""

    def __init__(self, boxes=None):
        self.boxes = list(boxes or [])
        self.calls = []

    def detect(self, image, min_neighbors=None):
        self.calls.append(min_neighbors)
        return list(self.boxes)


def face_image(seed=0, size=(240, 240)):
    rng = np.random.default_rng(seed)
    return rng.integers(0, 256, size=(size[0], size[1], 3), dtype=np.uint8)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def ledger_path(tmp_path):
    return tmp_path / "attendance.csv"


@pytest.fixture
def ledger(ledger_path):
    return AttendanceLogger(str(ledger_path), today=TODAY)


@pytest.fixture
def session(ledger, clock):
    return AttendanceSession(ledger, clock=clock, dwell_seconds=3.0, cooldown_seconds=10.0)
