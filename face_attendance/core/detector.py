"""
Face detectors returning (x, y, w, h) bounding boxes
"""
import os
import logging
import cv2

from face_attendance.config import settings
from face_attendance.core.errors import DetectorUnavailableError

logger = logging.getLogger(__name__)


def box_area(box):
    return box[2] * box[3]


def largest_box(boxes):
    """Largest-area box; the first one wins on ties."""
    if not len(boxes):
        return None
    return max(boxes, key=box_area)


class FaceDetector:
    """Haar cascade face detector"""

    def __init__(self, cascade_path=None, scale_factor=settings.SCALE_FACTOR,
                 min_neighbors=settings.MIN_NEIGHBORS, min_size=settings.MIN_FACE_SIZE):
        if not cascade_path:
            cascade_path = settings.HAAR_CASCADE_PATH or os.path.join(
                cv2.data.haarcascades, settings.HAAR_CASCADE_FILE)

        self.cascade_path = cascade_path
        self.scale_factor = scale_factor
        self.min_neighbors = min_neighbors
        self.min_size = min_size

        self.cascade = cv2.CascadeClassifier()
        if not os.path.exists(cascade_path) or not self.cascade.load(cascade_path):
            raise DetectorUnavailableError(f"Could not load face cascade from {cascade_path}")

        logger.info(f"Haar cascade loaded from {cascade_path}")

    def detect(self, image, min_neighbors=None):
        """Detect faces and return bounding boxes"""
        if image is None or image.size == 0:
            return []

        if image.ndim == 3:
            gray = cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
        else:
            gray = image

        faces = self.cascade.detectMultiScale(
            gray,
            scaleFactor=self.scale_factor,
            minNeighbors=self.min_neighbors if min_neighbors is None else min_neighbors,
            minSize=(self.min_size, self.min_size)
        )
        return [tuple(int(v) for v in face) for face in faces]


class MediaPipeFaceDetector:
    """MediaPipe-based face detector"""

    def __init__(self, min_detection_confidence=settings.DETECTION_CONFIDENCE,
                 min_size=settings.MIN_FACE_SIZE):
        try:
            import mediapipe as mp
            self.face_detection = mp.solutions.face_detection.FaceDetection(
                model_selection=1,
                min_detection_confidence=min_detection_confidence
            )
        except (ImportError, AttributeError) as e:
            raise DetectorUnavailableError(f"MediaPipe face detection unavailable: {e}") from e

        self.min_size = min_size
        logger.info("MediaPipe face detector initialized")

    def detect(self, image, min_neighbors=None):
        """Detect faces and return bounding boxes. min_neighbors is ignored."""
        if image is None or image.size == 0:
            return []

        if image.ndim == 2:
            image_rgb = cv2.cvtColor(image, cv2.COLOR_GRAY2RGB)
        else:
            image_rgb = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
        results = self.face_detection.process(image_rgb)

        faces = []
        if results.detections:
            h, w = image.shape[:2]
            for detection in results.detections:
                bbox = detection.location_data.relative_bounding_box
                x = max(0, int(bbox.xmin * w))
                y = max(0, int(bbox.ymin * h))
                width = min(int(bbox.width * w), w - x)
                height = min(int(bbox.height * h), h - y)

                if width < self.min_size or height < self.min_size:
                    continue
                faces.append((x, y, width, height))

        return faces

    def close(self):
        self.face_detection.close()


def create_detector(backend=None):
    """Build the configured detector backend."""
    backend = (backend or settings.DETECTOR_BACKEND).lower()
    if backend == "haar":
        return FaceDetector()
    if backend == "mediapipe":
        return MediaPipeFaceDetector()
    raise DetectorUnavailableError(f"Unknown detector backend: {backend}")
