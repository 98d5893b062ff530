"""
Detection -> signature -> match -> verification, one frame at a time
"""
import logging
import threading
import time
from dataclasses import dataclass
from typing import NamedTuple, Optional, Tuple

import cv2

from face_attendance.config import settings, thresholds
from face_attendance.core.detector import create_detector
from face_attendance.core.errors import InitError
from face_attendance.core.matcher import FaceMatcher, Identified
from face_attendance.core.session import AttendanceSession
from face_attendance.core.signature import SignatureCodec, crop
from face_attendance.core.tracker import FaceTracker
from face_attendance.core.verifier import StepOutcome, VerificationStatus
from face_attendance.database.attendance_log import AttendanceLogger
from face_attendance.database.gallery import GalleryStore, iter_gallery_dir

logger = logging.getLogger(__name__)

BOX_COLOR = (255, 0, 0)
LABEL_COLOR = (0, 255, 0)
STATUS_COLORS = {
    VerificationStatus.VERIFYING: (0, 255, 255),
    VerificationStatus.SUCCESS: (0, 255, 0),
    VerificationStatus.ALREADY_MARKED: (0, 165, 255),
}


@dataclass(frozen=True)
class FaceResult:
    box: Tuple[int, int, int, int]
    track_id: int
    match: object  # Identified or NotIdentified
    outcome: StepOutcome

    @property
    def label(self):
        if isinstance(self.match, Identified):
            return self.match.identity
        return "Unknown"

    @property
    def message(self):
        return status_message(self.outcome)


def status_message(outcome):
    if outcome.status == VerificationStatus.VERIFYING:
        return f"Verifying {outcome.identity}..."
    if outcome.status == VerificationStatus.SUCCESS:
        return f"Attendance Successful: {outcome.identity}"
    if outcome.status == VerificationStatus.ALREADY_MARKED:
        return f"Attendance Marked For Today: {outcome.identity}"
    return ""


class AttendancePipeline:
    """Runs the per-frame attendance pipeline"""

    def __init__(self, detector, gallery, session, codec=None,
                 reject_threshold=thresholds.REJECT_THRESHOLD):
        self.detector = detector
        self.gallery = gallery
        self.session = session
        self.codec = codec or SignatureCodec()
        self.matcher = FaceMatcher(gallery, reject_threshold)
        self.tracker = FaceTracker(session)
        self._lock = threading.Lock()

    @property
    def ledger(self):
        return self.session.ledger

    def process_frame(self, frame, now=None):
        """
        Process one frame

        Returns:
            List of FaceResult, one per detected face
        """
        if frame is None or frame.size == 0:
            return []

        if frame.ndim == 3:
            gray = cv2.cvtColor(frame, cv2.COLOR_BGR2GRAY)
        else:
            gray = frame
        gray = cv2.equalizeHist(gray)

        with self._lock:
            if now is None:
                now = self.session.now()

            boxes = self.detector.detect(gray)
            tracks = self.tracker.update(boxes)

            results = []
            for box, track in zip(boxes, tracks):
                signature = self.codec.encode(crop(frame, box))
                match = self.matcher.match(signature)
                outcome = track.verifier.step(match, now)
                results.append(FaceResult(box, track.track_id, match, outcome))

            return results

    def reset(self):
        with self._lock:
            self.tracker.reset()


def annotate(frame, results):
    """Draw face boxes, names and the verification banner onto the frame."""
    banner = None
    for result in results:
        x, y, w, h = result.box
        cv2.rectangle(frame, (x, y), (x + w, y + h), BOX_COLOR, 2)
        cv2.putText(frame, result.label, (x, max(0, y - 10)),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.8, LABEL_COLOR, 2)
        if banner is None and result.outcome.status != VerificationStatus.IDLE:
            banner = result.outcome

    if banner is not None:
        cv2.putText(frame, status_message(banner), (10, 30),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.8, STATUS_COLORS[banner.status], 2)
    return frame


class InitResult(NamedTuple):
    pipeline: Optional[AttendancePipeline] = None
    error: Optional[InitError] = None

    @property
    def ok(self):
        return self.error is None


def initialize(gallery_dir=settings.FACE_GALLERY_DIR,
               attendance_file=settings.ATTENDANCE_FILE,
               detector=None, detector_backend=None, today=None, clock=None):
    """
    Build the attendance pipeline

    Fatal startup problems (no detector, missing or empty gallery) are
    returned in InitResult.error instead of being raised.
    """
    try:
        if detector is None:
            detector = create_detector(detector_backend)

        ledger = AttendanceLogger(attendance_file, today=today)
        codec = SignatureCodec()
        gallery = GalleryStore.load(iter_gallery_dir(gallery_dir), detector, codec)
    except InitError as e:
        logger.error(str(e))
        return InitResult(error=e)

    session = AttendanceSession(ledger, clock=clock or time.monotonic)

    return InitResult(AttendancePipeline(detector, gallery, session, codec))
