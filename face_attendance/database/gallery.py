import os
import logging
import cv2

from face_attendance.config import settings
from face_attendance.core.detector import largest_box
from face_attendance.core.errors import GalleryEmptyError, GalleryNotFoundError
from face_attendance.core.signature import crop

logger = logging.getLogger(__name__)


def infer_name(stem):
    """'alice_01' -> 'alice'"""
    for i, ch in enumerate(stem):
        if ch in settings.NAME_SEPARATORS:
            return stem[:i]
    return stem


def iter_gallery_dir(gallery_dir, extensions=settings.IMAGE_EXTENSIONS):
    """Yield (identity, image) for every readable image file, in file-name order."""
    if not os.path.isdir(gallery_dir):
        raise GalleryNotFoundError(f"Photos path not found: {gallery_dir}")

    for filename in sorted(os.listdir(gallery_dir)):
        path = os.path.join(gallery_dir, filename)
        stem, ext = os.path.splitext(filename)
        if not os.path.isfile(path) or ext.lower() not in extensions:
            continue

        image = cv2.imread(path)
        if image is None:
            logger.warning(f"Skipping unreadable image: {path}")
            continue

        identity = infer_name(stem)
        if not identity:
            logger.warning(f"Skipping image with no name before separator: {path}")
            continue

        yield identity, image


class GalleryStore:
    """One signature per enrolled identity, immutable after load"""

    def __init__(self, data=None):
        self.data = dict(data or {})

    @classmethod
    def load(cls, entries, detector, codec, min_neighbors=settings.ENROLL_MIN_NEIGHBORS):
        """
        Build the gallery from (identity, image) pairs

        The largest detected face of each image is encoded; a later image
        for the same identity replaces the earlier signature.

        Raises:
            GalleryEmptyError: if no image produced a signature
        """
        data = {}
        for identity, image in entries:
            box = largest_box(detector.detect(image, min_neighbors=min_neighbors))
            if box is None:
                logger.warning(f"No face found for {identity}, skipping")
                continue

            signature = codec.encode(crop(image, box))
            if signature is None:
                logger.warning(f"Empty face crop for {identity}, skipping")
                continue

            if identity in data:
                logger.debug(f"Replacing earlier signature for {identity}")
            data[identity] = signature

        if not data:
            raise GalleryEmptyError("No usable faces found in gallery")

        logger.info(f"Loaded {len(data)} known faces")
        return cls(data)

    def all(self):
        return sorted(self.data.items(), key=lambda item: item[0])

    def identities(self):
        return sorted(self.data)

    def __len__(self):
        return len(self.data)
