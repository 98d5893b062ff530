"""
Configuration package for Face Attendance System
"""

from .settings import *
from .thresholds import *

__all__ = [
    # Camera
    'CAMERA_INDEX',
    'CAMERA_WIDTH',
    'CAMERA_HEIGHT',
    'FRAME_DELAY_MS',
    'WINDOW_NAME',

    # Face Detection
    'DETECTOR_BACKEND',
    'HAAR_CASCADE_FILE',
    'HAAR_CASCADE_PATH',
    'SCALE_FACTOR',
    'MIN_NEIGHBORS',
    'ENROLL_MIN_NEIGHBORS',
    'MIN_FACE_SIZE',
    'DETECTION_CONFIDENCE',

    # Gallery
    'IMAGE_EXTENSIONS',
    'NAME_SEPARATORS',

    # Signature
    'SIGNATURE_WIDTH',
    'SIGNATURE_HEIGHT',

    # Recognition & Verification
    'REJECT_THRESHOLD',
    'DWELL_SECONDS',
    'COOLDOWN_SECONDS',

    # Tracking
    'IOU_THRESHOLD',

    # Paths
    'FACE_GALLERY_DIR',
    'ATTENDANCE_FILE',

    # Server
    'SERVER_HOST',
    'SERVER_PORT',

    # Logging
    'LOG_LEVEL',
    'LOG_FORMAT',
    'setup_logging',
]
