from __future__ import annotations

from typing import Iterable, Mapping, Optional, Protocol, Sequence

from ..attendance.model import AttendanceHistoryRow
from .model import Player, TrainingPlan


class PlayerRepository(Protocol):
    """Repository interface for players, their plans and attendance history."""

    def get_for_coach(self, *, coach_id: int, player_id: int) -> Optional[Player]:
        """Player only if their age group is owned by ``coach_id``."""

        raise NotImplementedError

    def list_for_coach(self, coach_id: int) -> Sequence[Player]:
        raise NotImplementedError

    def list_for_age_group(self, age_group_id: int) -> Sequence[Player]:
        raise NotImplementedError

    def get_active_plans(self, player_ids: Iterable[int]) -> Mapping[int, TrainingPlan]:
        raise NotImplementedError

    def list_history(self, player_ids: Iterable[int], *, present_only: bool = False) -> Sequence[AttendanceHistoryRow]:
        """Attendance rows with their sessions, newest session first."""

        raise NotImplementedError
