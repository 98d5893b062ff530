"""
Nearest-neighbor face matcher over the enrolled gallery
"""
from dataclasses import dataclass
import numpy as np

from face_attendance.config import thresholds


@dataclass(frozen=True)
class Identified:
    identity: str
    distance: float


@dataclass(frozen=True)
class NotIdentified:
    distance: float = float('inf')


def signature_distance(a, b):
    """Mean squared intensity difference between two signatures."""
    diff = a.astype(np.float64) - b.astype(np.float64)
    return float(np.mean(diff * diff))


class FaceMatcher:
    """Exhaustive linear scan with a rejection threshold"""

    def __init__(self, gallery, reject_threshold=thresholds.REJECT_THRESHOLD):
        self.gallery = gallery
        self.reject_threshold = reject_threshold

    def distances(self, query):
        """(identity, distance) for every comparable gallery entry, in gallery order"""
        return [
            (identity, signature_distance(query, signature))
            for identity, signature in self.gallery.all()
            if signature.shape == query.shape
        ]

    def match(self, query):
        if query is None:
            return NotIdentified()

        best_name = None
        min_dist = float('inf')

        # strict < keeps the first entry on ties
        for identity, dist in self.distances(query):
            if dist < min_dist:
                min_dist = dist
                best_name = identity

        if best_name is not None and min_dist < self.reject_threshold:
            return Identified(best_name, min_dist)
        return NotIdentified(min_dist)
