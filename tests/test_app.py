from face_attendance.app import FaceAttendanceApp


class StubPipeline:
    def __init__(self, ledger):
        self.ledger = ledger
        self.reset_calls = 0

    def reset(self):
        self.reset_calls += 1


def scripted(*answers):
    answers = iter(answers)
    return lambda prompt: next(answers)


def test_view_today_empty(ledger, capsys):
    FaceAttendanceApp(StubPipeline(ledger)).view_attendance_today()

    out = capsys.readouterr().out
    assert "Attendance for 2024-03-04:" in out
    assert "No attendance yet." in out


def test_menu_lists_today_and_exits(ledger, capsys):
    ledger.commit("Bob")
    ledger.commit("Alice")

    FaceAttendanceApp(StubPipeline(ledger)).run(input_fn=scripted("2", "9", "3"))

    out = capsys.readouterr().out
    assert "- Alice\n- Bob\n" in out
    assert "Invalid choice." in out
    assert out.rstrip().endswith("Goodbye!")


def test_menu_exits_on_eof(ledger, capsys):
    def closed(prompt):
        raise EOFError

    FaceAttendanceApp(StubPipeline(ledger)).run(input_fn=closed)

    assert "Goodbye!" in capsys.readouterr().out
