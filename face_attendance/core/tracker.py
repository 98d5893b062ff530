"""
Face tracker giving every visible face its own verifier
"""
from face_attendance.config import thresholds
from face_attendance.core.verifier import FaceVerifier


def calculate_iou(box1, box2):
    """Calculate IoU between two (x, y, w, h) boxes"""
    x1, y1, w1, h1 = box1
    x2, y2, w2, h2 = box2

    xi1 = max(x1, x2)
    yi1 = max(y1, y2)
    xi2 = min(x1 + w1, x2 + w2)
    yi2 = min(y1 + h1, y2 + h2)

    if xi2 <= xi1 or yi2 <= yi1:
        return 0.0

    intersection = (xi2 - xi1) * (yi2 - yi1)
    union = w1 * h1 + w2 * h2 - intersection

    return intersection / union if union > 0 else 0.0


class FaceTrack:
    """A face followed across consecutive frames"""

    def __init__(self, track_id, box, session):
        self.track_id = track_id
        self.box = box
        self.verifier = FaceVerifier(session)

    def update(self, box):
        self.box = box


class FaceTracker:
    """
    Associates boxes to tracks by IoU

    A track that is not matched in a frame is dropped together with its
    verification streak.
    """

    def __init__(self, session, iou_threshold=thresholds.IOU_THRESHOLD):
        self.session = session
        self.iou_threshold = iou_threshold
        self.tracks = {}  # track_id -> FaceTrack
        self.next_track_id = 0

    def update(self, boxes):
        """
        Update tracks with this frame's boxes

        Returns:
            List of FaceTrack, one per box, in box order
        """
        matched = {}
        assigned = []

        for box in boxes:
            best_track_id = None
            best_iou = 0.0

            for track_id, track in self.tracks.items():
                if track_id in matched:
                    continue
                iou = calculate_iou(box, track.box)
                if iou > best_iou and iou > self.iou_threshold:
                    best_iou = iou
                    best_track_id = track_id

            if best_track_id is not None:
                track = self.tracks[best_track_id]
                track.update(box)
            else:
                track = FaceTrack(self.next_track_id, box, self.session)
                self.next_track_id += 1

            matched[track.track_id] = track
            assigned.append(track)

        self.tracks = matched
        return assigned

    def reset(self):
        self.tracks.clear()
        self.next_track_id = 0
