from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Optional, Sequence

from ..attendance.model import AttendanceHistoryRow
from ..coaches.model import AgeGroup
from ..coaches.repository import CoachRepository
from ..core.exceptions import NotFoundError
from .model import Player, PlayerStatistics, TrainingPlan
from .repository import PlayerRepository
from .statistics import compute_player_statistics


@dataclass(frozen=True)
class PlayerProfile:
    player: Player
    age_group: Optional[AgeGroup]
    active_plan: Optional[TrainingPlan]
    attendances: Sequence[AttendanceHistoryRow]
    statistics: PlayerStatistics


class PlayerService:
    """Use case: players of a coach with statistics derived on every request."""

    def __init__(self, players: PlayerRepository, coaches: CoachRepository):
        self._players = players
        self._coaches = coaches

    def _age_groups(self, coach_id: int) -> dict[int, AgeGroup]:
        return {ag.age_group_id: ag for ag in self._coaches.list_age_groups(coach_id)}

    def get_player_with_statistics(self, *, coach_id: int, player_id: int) -> PlayerProfile:
        player = self._players.get_for_coach(coach_id=coach_id, player_id=player_id)
        if not player:
            raise NotFoundError("Player not found")

        plan = self._players.get_active_plans([player.player_id]).get(player.player_id)
        history = list(self._players.list_history([player.player_id]))

        return PlayerProfile(
            player=player,
            age_group=self._age_groups(coach_id).get(player.age_group_id),
            active_plan=plan,
            attendances=history,
            statistics=compute_player_statistics((h.attendance for h in history), plan),
        )

    def list_players_with_statistics(self, *, coach_id: int) -> list[PlayerProfile]:
        players = list(self._players.list_for_coach(coach_id))
        ids = [p.player_id for p in players]

        plans = self._players.get_active_plans(ids)
        history_by_player: dict[int, list[AttendanceHistoryRow]] = defaultdict(list)
        for row in self._players.list_history(ids, present_only=True):
            history_by_player[row.attendance.player_id].append(row)

        age_groups = self._age_groups(coach_id)
        out = []
        for p in players:
            history = history_by_player.get(p.player_id, [])
            plan = plans.get(p.player_id)
            out.append(
                PlayerProfile(
                    player=p,
                    age_group=age_groups.get(p.age_group_id),
                    active_plan=plan,
                    attendances=history,
                    statistics=compute_player_statistics((h.attendance for h in history), plan),
                )
            )
        return out
