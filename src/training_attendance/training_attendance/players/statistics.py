from __future__ import annotations

import math
from typing import Iterable, Optional

from ..attendance.model import Attendance
from ..core.constants import COMPLIMENTARY_CAP
from ..core.enums import AttendanceStatus
from .model import PlayerStatistics, TrainingPlan


def attendance_rate(total_attendances: int, sessions_booked: int) -> int:
    """Percentage of booked sessions attended, rounded half up; 0 without bookings."""

    if sessions_booked <= 0:
        return 0
    return int(math.floor(total_attendances / sessions_booked * 100 + 0.5))


def compute_player_statistics(
    attendances: Iterable[Attendance],
    plan: Optional[TrainingPlan],
) -> PlayerStatistics:
    present = [a for a in attendances if a.status == AttendanceStatus.PRESENT]
    total = len(present)
    complimentary = sum(1 for a in present if a.is_complimentary)

    booked = plan.sessions_booked if plan else 0
    used = plan.sessions_used if plan else 0
    complimentary_used = plan.complimentary_used if plan else 0

    return PlayerStatistics(
        total_attendances=total,
        regular_attendances=total - complimentary,
        complimentary_attendances=complimentary,
        sessions_booked=booked,
        sessions_used=used,
        complimentary_used=complimentary_used,
        # Overbooking is not rejected anywhere, so this can go negative.
        remaining_sessions=booked - used,
        remaining_complimentary=max(COMPLIMENTARY_CAP - complimentary_used, 0),
        attendance_rate=attendance_rate(total, booked),
    )
