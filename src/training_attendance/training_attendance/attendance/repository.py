from __future__ import annotations

from datetime import datetime
from typing import ContextManager, Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from ..players.model import TrainingPlan
from .model import AttendanceRecord, Attendance, SessionAttendanceRow


class AttendanceUnitOfWork(Protocol):
    """Operations available inside one attendance transaction.

    Everything done through a unit of work commits together or not at all.
    """

    def lock_attendance(self, *, player_id: int, session_id: int) -> Optional[Attendance]:
        """Fetch the pair's attendance and hold it until the transaction ends."""

        raise NotImplementedError

    def save_attendance(
        self,
        *,
        player_id: int,
        session_id: int,
        status: AttendanceStatus,
        is_complimentary: bool,
        photo: Optional[str],
        notes: Optional[str],
        marked_at: datetime,
    ) -> int:
        """Insert or update the single row for (player_id, session_id); returns its id."""

        raise NotImplementedError

    def lock_active_plan(self, player_id: int) -> Optional[TrainingPlan]:
        raise NotImplementedError

    def increment_sessions_used(self, *, plan_id: int) -> bool:
        raise NotImplementedError

    def increment_complimentary_used(self, *, plan_id: int, cap: int) -> bool:
        """Increment only while below ``cap``; False when the cap was already reached."""

        raise NotImplementedError

    def get_record(self, attendance_id: int) -> AttendanceRecord:
        raise NotImplementedError


class AttendanceRepository(Protocol):
    def unit_of_work(self) -> ContextManager[AttendanceUnitOfWork]:
        raise NotImplementedError

    def list_for_session(self, session_id: int) -> Sequence[SessionAttendanceRow]:
        raise NotImplementedError
