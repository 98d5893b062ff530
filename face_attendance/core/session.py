"""
Per-run attendance session state
"""
import time

from face_attendance.config import thresholds


class AttendanceSession:
    """Shared state for every verifier in a run: ledger, cooldown table and clock"""

    def __init__(self, ledger, clock=time.monotonic,
                 dwell_seconds=thresholds.DWELL_SECONDS,
                 cooldown_seconds=thresholds.COOLDOWN_SECONDS):
        self.ledger = ledger
        self.clock = clock
        self.dwell_seconds = dwell_seconds
        self.cooldown_seconds = cooldown_seconds
        self.last_attempt = {}  # identity -> clock time of last mark attempt

    @property
    def today(self):
        return self.ledger.today

    def now(self):
        return self.clock()

    def in_cooldown(self, identity, now):
        last = self.last_attempt.get(identity)
        return last is not None and (now - last) < self.cooldown_seconds

    def record_attempt(self, identity, now):
        self.last_attempt[identity] = now
