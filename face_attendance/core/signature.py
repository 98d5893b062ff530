"""
Face signature codec: grayscale, fixed size, histogram-equalized crops
"""
import cv2
import numpy as np

from face_attendance.config import thresholds


def crop(image, box):
    """Crop a bounding box out of an image, clipped to the image bounds."""
    if image is None or image.size == 0:
        return None

    x, y, w, h = box
    img_h, img_w = image.shape[:2]
    x1, y1 = max(0, x), max(0, y)
    x2, y2 = min(img_w, x + w), min(img_h, y + h)
    if x2 <= x1 or y2 <= y1:
        return None

    return image[y1:y2, x1:x2]


class SignatureCodec:
    """Turns a face crop into a comparable fixed-size signature.

    Enrollment and live recognition must share one codec configuration,
    otherwise signatures are not comparable.
    """

    def __init__(self, width=thresholds.SIGNATURE_WIDTH, height=thresholds.SIGNATURE_HEIGHT):
        self.width = width
        self.height = height

    @property
    def shape(self):
        return (self.height, self.width)

    def to_gray(self, face_crop):
        if face_crop.ndim == 2:
            return face_crop
        channels = face_crop.shape[2]
        if channels == 1:
            return face_crop[:, :, 0]
        if channels == 4:
            return cv2.cvtColor(face_crop, cv2.COLOR_BGRA2GRAY)
        return cv2.cvtColor(face_crop, cv2.COLOR_BGR2GRAY)

    def encode(self, face_crop):
        """
        Encode a face crop

        Args:
            face_crop: BGR, BGRA or grayscale image

        Returns:
            uint8 array of shape (height, width), or None for an empty crop
        """
        if face_crop is None or face_crop.size == 0:
            return None

        gray = self.to_gray(face_crop)
        if gray.dtype != np.uint8:
            gray = np.clip(gray, 0, 255).astype(np.uint8)

        resized = cv2.resize(gray, (self.width, self.height))
        return cv2.equalizeHist(resized)
