from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import AttendanceStatus
from ..players.model import Player, TrainingPlan
from ..sessions.model import TrainingSession


@dataclass(frozen=True)
class Attendance:
    """Domain entity: the single attendance mark of a player for a session."""

    attendance_id: int
    player_id: int
    session_id: int
    status: AttendanceStatus
    is_complimentary: bool
    marked_at: datetime
    photo: Optional[str] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class AttendanceRecord:
    """Persisted attendance with its player and session denormalized."""

    attendance: Attendance
    player: Player
    session: TrainingSession


@dataclass(frozen=True)
class SessionAttendanceRow:
    """Read-model: one attendee of a session with their active plan snapshot."""

    attendance: Attendance
    player: Player
    active_plan: Optional[TrainingPlan] = None


@dataclass(frozen=True)
class AttendanceHistoryRow:
    """Read-model: a player's attendance together with the session it was for."""

    attendance: Attendance
    session: TrainingSession
