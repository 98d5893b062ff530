"""
Core modules for Face Attendance System
"""

from .errors import InitError, DetectorUnavailableError, GalleryNotFoundError, GalleryEmptyError
from .detector import FaceDetector, MediaPipeFaceDetector, create_detector
from .signature import SignatureCodec
from .matcher import FaceMatcher, Identified, NotIdentified
from .session import AttendanceSession
from .verifier import FaceVerifier, VerificationStatus, StepOutcome
from .tracker import FaceTracker

__all__ = [
    'InitError',
    'DetectorUnavailableError',
    'GalleryNotFoundError',
    'GalleryEmptyError',
    'FaceDetector',
    'MediaPipeFaceDetector',
    'create_detector',
    'SignatureCodec',
    'FaceMatcher',
    'Identified',
    'NotIdentified',
    'AttendanceSession',
    'FaceVerifier',
    'VerificationStatus',
    'StepOutcome',
    'FaceTracker',
]
