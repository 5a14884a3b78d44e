from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Attendance mark stored per (player, session)."""

    PRESENT = "PRESENT"
    ABSENT = "ABSENT"


class TimeSlot(str, Enum):
    """Fixed daily session windows."""

    MORNING = "MORNING"
    EVENING = "EVENING"


class SessionStatus(str, Enum):
    SCHEDULED = "SCHEDULED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
