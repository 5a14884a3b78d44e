from __future__ import annotations

from typing import Iterable, Mapping, Optional, Sequence

from ..attendance.model import AttendanceHistoryRow
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..database.rows import (
    ATTENDANCE_COLUMNS,
    PLAN_COLUMNS,
    PLAYER_COLUMNS,
    SESSION_COLUMNS,
    columns,
    row_to_attendance,
    row_to_plan,
    row_to_player,
    row_to_session,
)
from .model import Player, TrainingPlan
from .repository import PlayerRepository


def _placeholders(ids: Sequence[int]) -> str:
    return ",".join(["%s"] * len(ids))


class MySQLPlayerRepository(PlayerRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_coach(self, *, coach_id: int, player_id: int) -> Optional[Player]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {columns(PLAYER_COLUMNS, table="p")}
                FROM players p
                JOIN age_groups ag ON ag.age_group_id = p.age_group_id
                WHERE p.player_id=%s AND ag.coach_id=%s
                """,
                (int(player_id), int(coach_id)),
            )
            r = fetchone(cur)
            return row_to_player(r) if r else None

    def list_for_coach(self, coach_id: int) -> Sequence[Player]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {columns(PLAYER_COLUMNS, table="p")}
                FROM players p
                JOIN age_groups ag ON ag.age_group_id = p.age_group_id
                WHERE ag.coach_id=%s
                ORDER BY p.name ASC
                """,
                (int(coach_id),),
            )
            return [row_to_player(r) for r in fetchall(cur)]

    def list_for_age_group(self, age_group_id: int) -> Sequence[Player]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {columns(PLAYER_COLUMNS, table="p")}
                FROM players p
                WHERE p.age_group_id=%s
                ORDER BY p.name ASC
                """,
                (int(age_group_id),),
            )
            return [row_to_player(r) for r in fetchall(cur)]

    def get_active_plans(self, player_ids: Iterable[int]) -> Mapping[int, TrainingPlan]:
        ids = [int(i) for i in player_ids]
        if not ids:
            return {}

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {columns(PLAN_COLUMNS, table="tp")}
                FROM training_plans tp
                WHERE tp.is_active=1 AND tp.player_id IN ({_placeholders(ids)})
                ORDER BY tp.plan_id ASC
                """,
                tuple(ids),
            )
            plans: dict[int, TrainingPlan] = {}
            for r in fetchall(cur):
                plan = row_to_plan(r)
                if plan:
                    plans[plan.player_id] = plan
            return plans

    def list_history(self, player_ids: Iterable[int], *, present_only: bool = False) -> Sequence[AttendanceHistoryRow]:
        ids = [int(i) for i in player_ids]
        if not ids:
            return []

        clauses = [f"a.player_id IN ({_placeholders(ids)})"]
        if present_only:
            clauses.append("a.status='PRESENT'")
        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    {columns(ATTENDANCE_COLUMNS, table="a", prefix="a_")},
                    {columns(SESSION_COLUMNS, table="s", prefix="s_")}
                FROM attendance a
                JOIN training_sessions s ON s.session_id = a.session_id
                WHERE {where}
                ORDER BY s.session_date DESC, a.attendance_id DESC
                """,
                tuple(ids),
            )
            return [
                AttendanceHistoryRow(
                    attendance=row_to_attendance(r, "a_"),
                    session=row_to_session(r, "s_"),
                )
                for r in fetchall(cur)
            ]
