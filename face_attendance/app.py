"""
Console face attendance: webcam verification and today's attendance
"""
import sys
import logging
import cv2

from face_attendance.config import settings
from face_attendance.core.pipeline import annotate, initialize

logger = logging.getLogger(__name__)

MENU = """
==== Face Attendance ====
1. Start Attendance (webcam)
2. View Today's Attendance
3. Exit"""


class FaceAttendanceApp:
    def __init__(self, pipeline, camera=settings.CAMERA_INDEX):
        self.pipeline = pipeline
        self.camera = camera

    def run_attendance(self):
        cap = cv2.VideoCapture(self.camera)
        if not cap.isOpened():
            print("Cannot open webcam!")
            return

        cap.set(cv2.CAP_PROP_FRAME_WIDTH, settings.CAMERA_WIDTH)
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, settings.CAMERA_HEIGHT)
        print("Press 'q' to quit.")

        try:
            while True:
                ret, frame = cap.read()
                if not ret or frame is None or frame.size == 0:
                    # transient capture failure, try the next frame
                    if cv2.waitKey(settings.FRAME_DELAY_MS) & 0xFF in (ord('q'), ord('Q')):
                        break
                    continue

                try:
                    results = self.pipeline.process_frame(frame)
                except OSError as e:
                    logger.error(f"Frame skipped: {e}")
                    results = []

                cv2.imshow(settings.WINDOW_NAME, annotate(frame, results))
                if cv2.waitKey(settings.FRAME_DELAY_MS) & 0xFF in (ord('q'), ord('Q')):
                    break
        finally:
            cap.release()
            cv2.destroyAllWindows()
            self.pipeline.reset()

    def view_attendance_today(self):
        ledger = self.pipeline.ledger
        names = ledger.today_identities()
        print(f"\nAttendance for {ledger.today}:")
        if not names:
            print("No attendance yet.")
        for name in names:
            print(f"- {name}")

    def run(self, input_fn=input):
        while True:
            print(MENU)
            try:
                choice = input_fn("Choice: ").strip()
            except EOFError:
                choice = "3"

            if choice == "1":
                self.run_attendance()
            elif choice == "2":
                self.view_attendance_today()
            elif choice == "3":
                print("Goodbye!")
                return
            else:
                print("Invalid choice.")


def main():
    settings.setup_logging()

    result = initialize()
    if not result.ok:
        print(f"Error: {result.error}", file=sys.stderr)
        sys.exit(1)

    FaceAttendanceApp(result.pipeline).run()


if __name__ == "__main__":
    main()
