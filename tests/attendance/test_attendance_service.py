from __future__ import annotations

import pytest

from src.training_attendance.training_attendance.attendance.reconciler import AttendanceQuotaReconciler
from src.training_attendance.training_attendance.attendance.service import (
    AttendanceService,
    MarkRequest,
    parse_mark_request,
)
from src.training_attendance.training_attendance.core.enums import AttendanceStatus
from src.training_attendance.training_attendance.core.exceptions import ConflictError, NotFoundError, ValidationError

from conftest import InMemoryPlayers


class FlakyReconciler:
    """Raises ConflictError for the first ``failures`` calls."""

    def __init__(self, inner: AttendanceQuotaReconciler, failures: int):
        self._inner = inner
        self._failures = failures
        self.calls = 0

    def record_attendance(self, **kwargs):
        self.calls += 1
        if self.calls <= self._failures:
            raise ConflictError("duplicate key")
        return self._inner.record_attendance(**kwargs)


def _request(**overrides) -> MarkRequest:
    values = dict(player_id=1, session_id=1, status=AttendanceStatus.PRESENT, is_complimentary=False)
    values.update(overrides)
    return MarkRequest(**values)


def test_parse_mark_request_accepts_client_body():
    req = parse_mark_request(
        {"playerId": "1", "sessionId": 2, "status": "PRESENT", "isComplimentary": True, "photo": "b64", "notes": "ok"}
    )

    assert req == MarkRequest(
        player_id=1, session_id=2, status=AttendanceStatus.PRESENT, is_complimentary=True, photo="b64", notes="ok"
    )


def test_parse_mark_request_defaults_complimentary_to_false():
    assert parse_mark_request({"playerId": 1, "sessionId": 2, "status": "ABSENT"}).is_complimentary is False


@pytest.mark.parametrize(
    "body",
    [
        {"sessionId": 1, "status": "PRESENT"},
        {"playerId": 1, "status": "PRESENT"},
        {"playerId": 1, "sessionId": 1},
        {"playerId": 1, "sessionId": 1, "status": "LATE"},
        {"playerId": "x", "sessionId": 1, "status": "PRESENT"},
        {"playerId": 1, "sessionId": 1, "status": "PRESENT", "isComplimentary": "yes"},
        {"playerId": 1.7, "sessionId": 1, "status": "PRESENT"},
        [1, 2],
        "x",
        5,
    ],
)
def test_parse_mark_request_rejects_invalid_bodies(body):
    with pytest.raises(ValidationError):
        parse_mark_request(body)


def test_record_attendance_in_scope(container, db):
    record = container.attendance_service.record_attendance(coach_id=1, request=_request())

    assert record.attendance.status == AttendanceStatus.PRESENT
    assert db.plans[100].sessions_used == 1


def test_session_of_another_coach_is_not_found(container, db):
    with pytest.raises(NotFoundError):
        container.attendance_service.record_attendance(coach_id=1, request=_request(session_id=3))
    assert db.attendance == {}


def test_player_of_another_coach_is_not_found(container, db):
    with pytest.raises(NotFoundError):
        container.attendance_service.record_attendance(coach_id=1, request=_request(player_id=3))
    assert db.attendance == {}


def test_unknown_session_is_not_found(container):
    with pytest.raises(NotFoundError):
        container.attendance_service.record_attendance(coach_id=1, request=_request(session_id=999))


def test_conflict_is_retried_once(container, attendance_repo, db):
    flaky = FlakyReconciler(AttendanceQuotaReconciler(attendance_repo), failures=1)
    svc = AttendanceService(flaky, container.session_service, InMemoryPlayers(db))

    svc.record_attendance(coach_id=1, request=_request())

    assert flaky.calls == 2
    assert db.plans[100].sessions_used == 1


def test_second_conflict_propagates(container, attendance_repo, db):
    flaky = FlakyReconciler(AttendanceQuotaReconciler(attendance_repo), failures=2)
    svc = AttendanceService(flaky, container.session_service, InMemoryPlayers(db))

    with pytest.raises(ConflictError):
        svc.record_attendance(coach_id=1, request=_request())

    assert flaky.calls == 2
    assert db.plans[100].sessions_used == 0


def test_session_attendance_requires_scope(container):
    with pytest.raises(NotFoundError):
        container.attendance_service.get_session_attendance(coach_id=2, session_id=1)

