"""
Dwell-time verification before marking attendance
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from face_attendance.core.matcher import Identified
from face_attendance.database.attendance_log import AttendanceRecord, AlreadyMarked

logger = logging.getLogger(__name__)


class VerificationStatus(Enum):
    IDLE = "idle"
    VERIFYING = "verifying"
    SUCCESS = "success"
    ALREADY_MARKED = "already_marked"


@dataclass
class Candidate:
    identity: str
    started_at: float
    shown: bool = False
    final_status: Optional[VerificationStatus] = None


@dataclass(frozen=True)
class StepOutcome:
    status: VerificationStatus
    identity: Optional[str] = None
    elapsed: float = 0.0
    record: Optional[AttendanceRecord] = None  # set only on the committing frame


class FaceVerifier:
    """
    Debounces per-frame identifications into a single attendance commit.

    An identity must be seen continuously for dwell_seconds; any frame
    without it restarts the streak.
    """

    def __init__(self, session):
        self.session = session
        self.candidate = None

    @property
    def is_idle(self):
        return self.candidate is None

    def reset(self):
        self.candidate = None

    def step(self, result, now=None):
        """
        Advance one frame

        Args:
            result: Identified, NotIdentified, or None when no face was seen
            now: clock time, defaults to the session clock

        Returns:
            StepOutcome
        """
        if now is None:
            now = self.session.now()

        if not isinstance(result, Identified):
            self.candidate = None
            return StepOutcome(VerificationStatus.IDLE)

        identity = result.identity
        if self.candidate is None or self.candidate.identity != identity:
            self.candidate = Candidate(identity, now)
            return StepOutcome(VerificationStatus.VERIFYING, identity)

        candidate = self.candidate
        elapsed = now - candidate.started_at
        if elapsed < self.session.dwell_seconds:
            return StepOutcome(VerificationStatus.VERIFYING, identity, elapsed)

        if candidate.shown:
            return StepOutcome(candidate.final_status, identity, elapsed)

        ledger = self.session.ledger
        if self.session.in_cooldown(identity, now):
            if ledger.already_marked_today(identity):
                self._show(VerificationStatus.ALREADY_MARKED)
                return StepOutcome(VerificationStatus.ALREADY_MARKED, identity, elapsed)
            return StepOutcome(VerificationStatus.VERIFYING, identity, elapsed)

        self.session.record_attempt(identity, now)

        if ledger.already_marked_today(identity):
            logger.info(f"Already marked today: {identity} ({self.session.today})")
            self._show(VerificationStatus.ALREADY_MARKED)
            return StepOutcome(VerificationStatus.ALREADY_MARKED, identity, elapsed)

        outcome = ledger.commit(identity)
        if isinstance(outcome, AlreadyMarked):
            self._show(VerificationStatus.ALREADY_MARKED)
            return StepOutcome(VerificationStatus.ALREADY_MARKED, identity, elapsed)

        self._show(VerificationStatus.SUCCESS)
        return StepOutcome(VerificationStatus.SUCCESS, identity, elapsed, outcome)

    def _show(self, status):
        self.candidate.shown = True
        self.candidate.final_status = status
