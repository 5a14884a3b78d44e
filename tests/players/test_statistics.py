from datetime import datetime

from src.training_attendance.training_attendance.attendance.model import Attendance
from src.training_attendance.training_attendance.core.enums import AttendanceStatus
from src.training_attendance.training_attendance.players.statistics import attendance_rate, compute_player_statistics

from conftest import make_plan


def _att(i: int, status=AttendanceStatus.PRESENT, complimentary=False) -> Attendance:
    return Attendance(
        attendance_id=i,
        player_id=1,
        session_id=i,
        status=status,
        is_complimentary=complimentary,
        marked_at=datetime(2026, 2, 1, 9, 0),
    )


def test_counts_only_present_rows():
    rows = [
        _att(1),
        _att(2, complimentary=True),
        _att(3, status=AttendanceStatus.ABSENT),
        _att(4, status=AttendanceStatus.ABSENT, complimentary=True),
    ]

    stats = compute_player_statistics(rows, make_plan(1, 1, booked=12, used=1, complimentary=1))

    assert stats.total_attendances == 2
    assert stats.complimentary_attendances == 1
    assert stats.regular_attendances == 1
    assert stats.remaining_sessions == 11
    assert stats.remaining_complimentary == 2
    assert stats.attendance_rate == 17


def test_remaining_sessions_can_go_negative():
    stats = compute_player_statistics([], make_plan(1, 1, booked=12, used=13))

    assert stats.remaining_sessions == -1


def test_no_plan_means_zero_quota():
    stats = compute_player_statistics([_att(1)], None)

    assert stats.sessions_booked == 0
    assert stats.remaining_sessions == 0
    assert stats.remaining_complimentary == 3
    assert stats.attendance_rate == 0


def test_attendance_rate_zero_when_nothing_booked():
    assert attendance_rate(5, 0) == 0


def test_attendance_rate_rounds_half_up():
    assert attendance_rate(1, 8) == 13
    assert attendance_rate(12, 12) == 100
    assert attendance_rate(13, 12) == 108
