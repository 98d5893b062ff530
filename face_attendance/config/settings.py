"""
Global settings for Face Attendance System
"""
import os
import logging

logger = logging.getLogger(__name__)


def _env_int(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Invalid {name}={value!r}, using default {default}")
        return default


# ============================================================================
# CAMERA SETTINGS
# ============================================================================
CAMERA_INDEX = _env_int("CAMERA_INDEX", 0)
CAMERA_WIDTH = 640
CAMERA_HEIGHT = 480
FRAME_DELAY_MS = 10  # waitKey delay between frames
WINDOW_NAME = "Attendance"

# ============================================================================
# FACE DETECTION
# ============================================================================
DETECTOR_BACKEND = os.getenv("DETECTOR_BACKEND", "haar")  # haar or mediapipe
HAAR_CASCADE_FILE = "haarcascade_frontalface_default.xml"
HAAR_CASCADE_PATH = os.getenv("HAAR_CASCADE_PATH", "")  # empty = bundled with OpenCV
SCALE_FACTOR = 1.1
MIN_NEIGHBORS = 5  # live frames
ENROLL_MIN_NEIGHBORS = 4  # gallery photos
MIN_FACE_SIZE = 80  # pixels
DETECTION_CONFIDENCE = 0.7  # MediaPipe only

# ============================================================================
# GALLERY
# ============================================================================
IMAGE_EXTENSIONS = ('.jpg', '.jpeg', '.png', '.bmp', '.tiff')
NAME_SEPARATORS = "_- "

# ============================================================================
# DATABASE PATHS
# ============================================================================
FACE_GALLERY_DIR = os.getenv("FACE_GALLERY_DIR", "photos")
ATTENDANCE_FILE = os.getenv("ATTENDANCE_FILE", "attendance.csv")

# ============================================================================
# SERVER
# ============================================================================
SERVER_HOST = os.getenv("SERVER_HOST", "0.0.0.0")
SERVER_PORT = _env_int("SERVER_PORT", 8000)

# ============================================================================
# LOGGING
# ============================================================================
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level=None):
    """Configure root logging from LOG_LEVEL / LOG_FORMAT."""
    level = level or LOG_LEVEL
    if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        logger.warning(f"Invalid log level: {level}, using INFO")
        level = "INFO"
    logging.basicConfig(level=getattr(logging, level), format=LOG_FORMAT)
