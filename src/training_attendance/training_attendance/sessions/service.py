from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional, Sequence

from ..attendance.model import SessionAttendanceRow
from ..attendance.repository import AttendanceRepository
from ..coaches.model import AgeGroup
from ..coaches.repository import CoachRepository
from ..common.datetime_utils import day_bounds, now_local
from ..core.enums import SessionStatus
from ..core.exceptions import NotFoundError
from ..players.model import Player, TrainingPlan
from ..players.repository import PlayerRepository
from .model import TrainingSession
from .repository import SessionRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RosterEntry:
    player: Player
    active_plan: Optional[TrainingPlan]


@dataclass(frozen=True)
class SessionOverview:
    """A session with its age group roster and the marks taken so far."""

    session: TrainingSession
    age_group: Optional[AgeGroup]
    players: Sequence[RosterEntry]
    attendances: Sequence[SessionAttendanceRow]


class SessionService:
    def __init__(
        self,
        sessions: SessionRepository,
        coaches: CoachRepository,
        players: PlayerRepository,
        attendance: AttendanceRepository,
    ):
        self._sessions = sessions
        self._coaches = coaches
        self._players = players
        self._attendance = attendance

    def require_in_scope(self, *, coach_id: int, session_id: int) -> TrainingSession:
        session = self._sessions.get_for_coach(coach_id=coach_id, session_id=session_id)
        if not session:
            raise NotFoundError("Session not found")
        return session

    def _overview(self, session: TrainingSession, age_groups: dict[int, AgeGroup]) -> SessionOverview:
        roster = list(self._players.list_for_age_group(session.age_group_id))
        plans = self._players.get_active_plans(p.player_id for p in roster)
        return SessionOverview(
            session=session,
            age_group=age_groups.get(session.age_group_id),
            players=[RosterEntry(player=p, active_plan=plans.get(p.player_id)) for p in roster],
            attendances=list(self._attendance.list_for_session(session.session_id)),
        )

    def list_today(self, *, coach_id: int, today: date | None = None) -> list[SessionOverview]:
        start, end = day_bounds(today or now_local().date())
        sessions = self._sessions.list_for_coach_between(coach_id=coach_id, start=start, end=end)
        age_groups = {ag.age_group_id: ag for ag in self._coaches.list_age_groups(coach_id)}
        return [self._overview(s, age_groups) for s in sessions]

    def get_overview(self, *, coach_id: int, session_id: int) -> SessionOverview:
        session = self.require_in_scope(coach_id=coach_id, session_id=session_id)
        age_groups = {ag.age_group_id: ag for ag in self._coaches.list_age_groups(coach_id)}
        return self._overview(session, age_groups)

    def update_status(self, *, coach_id: int, session_id: int, status: SessionStatus) -> TrainingSession:
        """Set any status from any status; transitions are not validated."""

        session = self.require_in_scope(coach_id=coach_id, session_id=session_id)
        self._sessions.update_status(session_id=session.session_id, status=status)
        logger.info("Session %s status %s -> %s", session.session_id, session.status.value, status.value)
        return self.require_in_scope(coach_id=coach_id, session_id=session_id)

    def upload_group_photo(self, *, coach_id: int, session_id: int, photo: Optional[str]) -> TrainingSession:
        session = self.require_in_scope(coach_id=coach_id, session_id=session_id)
        self._sessions.update_group_photo(session_id=session.session_id, photo=photo)
        logger.info("Session %s group photo %s", session.session_id, "set" if photo else "cleared")
        return self.require_in_scope(coach_id=coach_id, session_id=session_id)
