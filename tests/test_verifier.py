from face_attendance.core.matcher import Identified, NotIdentified
from face_attendance.core.session import AttendanceSession
from face_attendance.core.verifier import FaceVerifier, VerificationStatus
from face_attendance.database.attendance_log import AlreadyMarked, AttendanceLogger

from conftest import TODAY

VERIFYING = VerificationStatus.VERIFYING
SUCCESS = VerificationStatus.SUCCESS
ALREADY = VerificationStatus.ALREADY_MARKED
IDLE = VerificationStatus.IDLE


def seen(name):
    return Identified(name, 10.0)


def feed(verifier, name, times):
    result = seen(name) if name else None
    return [verifier.step(result, now=t) for t in times]


class CountingLedger:
    def __init__(self, ledger):
        self.ledger = ledger
        self.commits = 0

    def __getattr__(self, name):
        return getattr(self.ledger, name)

    def commit(self, identity):
        self.commits += 1
        return self.ledger.commit(identity)


def test_idle_stays_idle_without_identity(session):
    verifier = FaceVerifier(session)

    assert verifier.step(None, now=0).status == IDLE
    assert verifier.step(NotIdentified(2000.0), now=1).status == IDLE
    assert verifier.is_idle


def test_short_streak_never_commits(session, ledger):
    verifier = FaceVerifier(session)

    outcomes = feed(verifier, "Alice", [0.0, 1.0, 2.0, 2.9])

    assert [o.status for o in outcomes] == [VERIFYING] * 4
    assert ledger.records() == []
    assert session.last_attempt == {}


def test_dwell_reached_commits_once(session, ledger):
    verifier = FaceVerifier(session)

    outcomes = feed(verifier, "Alice", [0.0, 1.5, 3.0])

    assert outcomes[-1].status == SUCCESS
    assert outcomes[-1].record.identity == "Alice"
    assert outcomes[-1].elapsed == 3.0
    assert session.last_attempt == {"Alice": 3.0}
    assert [r.identity for r in ledger.records()] == ["Alice"]


def test_success_banner_persists_without_ledger_calls(ledger, clock):
    counting = CountingLedger(ledger)
    session = AttendanceSession(counting, clock=clock, dwell_seconds=3.0, cooldown_seconds=10.0)
    verifier = FaceVerifier(session)

    outcomes = feed(verifier, "Alice", [0.0, 3.0, 4.0, 20.0, 60.0])

    assert [o.status for o in outcomes[1:]] == [SUCCESS] * 4
    assert [o.record is not None for o in outcomes[1:]] == [True, False, False, False]
    assert counting.commits == 1
    assert len(ledger.records()) == 1


def test_unknown_gap_restarts_dwell(session, ledger):
    verifier = FaceVerifier(session)

    feed(verifier, "Alice", [0.0, 2.0])
    assert verifier.step(NotIdentified(), now=2.5).status == IDLE
    outcomes = feed(verifier, "Alice", [3.0, 4.0, 5.9])

    assert [o.status for o in outcomes] == [VERIFYING] * 3
    assert ledger.records() == []
    assert verifier.step(seen("Alice"), now=6.0).status == SUCCESS


def test_no_face_gap_restarts_dwell(session, ledger):
    verifier = FaceVerifier(session)

    feed(verifier, "Alice", [0.0, 2.9])
    feed(verifier, None, [2.95])

    assert feed(verifier, "Alice", [3.0, 5.0])[-1].status == VERIFYING
    assert ledger.records() == []


def test_switching_identity_restarts_dwell(session, ledger):
    verifier = FaceVerifier(session)

    feed(verifier, "Alice", [0.0, 2.0])
    outcomes = feed(verifier, "Bob", [2.5, 4.0, 5.4])

    assert [o.status for o in outcomes] == [VERIFYING] * 3
    assert verifier.candidate.identity == "Bob"
    assert verifier.step(seen("Bob"), now=5.5).status == SUCCESS
    assert [r.identity for r in ledger.records()] == ["Bob"]


def test_scenario_new_streak_after_commit_is_already_marked(session, ledger):
    verifier = FaceVerifier(session)

    assert feed(verifier, "Alice", [0.0, 3.0])[-1].status == SUCCESS
    feed(verifier, None, [3.5])
    outcomes = feed(verifier, "Alice", [4.0, 5.0, 7.0, 8.0])

    assert [o.status for o in outcomes] == [VERIFYING, VERIFYING, ALREADY, ALREADY]
    assert len(ledger.records()) == 1


def test_scenario_already_marked_at_startup(ledger_path, clock):
    ledger_path.write_text("Bob,2024-03-04,Mon\n", encoding="utf-8")
    ledger = AttendanceLogger(str(ledger_path), today=TODAY)
    session = AttendanceSession(ledger, clock=clock, dwell_seconds=3.0, cooldown_seconds=10.0)
    verifier = FaceVerifier(session)

    outcomes = feed(verifier, "Bob", [0.0, 1.0, 3.0, 4.0, 30.0])

    assert [o.status for o in outcomes] == [VERIFYING, VERIFYING, ALREADY, ALREADY, ALREADY]
    assert SUCCESS not in {o.status for o in outcomes}
    assert len(ledger.records()) == 1


def test_cooldown_blocks_attempts_within_window(session, ledger):
    verifier = FaceVerifier(session)
    session.record_attempt("Alice", 0.0)

    outcomes = feed(verifier, "Alice", [1.0, 4.0, 9.9])

    assert [o.status for o in outcomes] == [VERIFYING] * 3
    assert ledger.records() == []
    assert session.last_attempt == {"Alice": 0.0}

    assert verifier.step(seen("Alice"), now=10.0).status == SUCCESS
    assert session.last_attempt == {"Alice": 10.0}


def test_commit_race_is_treated_as_already_marked(session):
    class RacingLedger:
        today = "2024-03-04"

        def already_marked_today(self, identity):
            return False

        def commit(self, identity):
            return AlreadyMarked(identity)

    session.ledger = RacingLedger()
    verifier = FaceVerifier(session)

    outcomes = feed(verifier, "Alice", [0.0, 3.0, 4.0])

    assert [o.status for o in outcomes[1:]] == [ALREADY, ALREADY]
    assert outcomes[1].record is None


def test_two_verifiers_share_one_commit(session, ledger):
    left, right = FaceVerifier(session), FaceVerifier(session)

    for t in [0.0, 1.0, 2.0, 3.0, 4.0]:
        a = left.step(seen("Alice"), now=t)
        b = right.step(seen("Alice"), now=t)

    assert {a.status, b.status} == {SUCCESS, ALREADY}
    assert len(ledger.records()) == 1


def test_step_uses_session_clock(session, clock, ledger):
    verifier = FaceVerifier(session)

    verifier.step(seen("Alice"))
    clock.advance(3.0)

    assert verifier.step(seen("Alice")).status == SUCCESS


def test_broken_line_before_marked_row_still_blocks_recommit(ledger_path, clock):
    ledger_path.write_text('"Eve,2024-03-04,Mon\nBob,2024-03-04,Mon\n', encoding="utf-8")
    ledger = AttendanceLogger(str(ledger_path), today=TODAY)
    session = AttendanceSession(ledger, clock=clock, dwell_seconds=3.0, cooldown_seconds=10.0)

    outcomes = feed(FaceVerifier(session), "Bob", [0.0, 3.0])

    assert [o.status for o in outcomes] == [VERIFYING, ALREADY]
    assert [r.identity for r in ledger.records()] == ["Bob"]
