from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import SessionStatus
from .model import TrainingSession


class SessionRepository(Protocol):
    def get_for_coach(self, *, coach_id: int, session_id: int) -> Optional[TrainingSession]:
        """Session only if its age group is owned by ``coach_id``."""

        raise NotImplementedError

    def list_for_coach_between(self, *, coach_id: int, start: datetime, end: datetime) -> Sequence[TrainingSession]:
        """Sessions in [start, end), MORNING before EVENING."""

        raise NotImplementedError

    def update_status(self, *, session_id: int, status: SessionStatus) -> bool:
        raise NotImplementedError

    def update_group_photo(self, *, session_id: int, photo: Optional[str]) -> bool:
        raise NotImplementedError
