from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.enums import SessionStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..database.rows import SESSION_COLUMNS, columns, row_to_session
from .model import TrainingSession
from .repository import SessionRepository


class MySQLSessionRepository(SessionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_coach(self, *, coach_id: int, session_id: int) -> Optional[TrainingSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {columns(SESSION_COLUMNS, table="s")}
                FROM training_sessions s
                JOIN age_groups ag ON ag.age_group_id = s.age_group_id
                WHERE s.session_id=%s AND ag.coach_id=%s
                """,
                (int(session_id), int(coach_id)),
            )
            r = fetchone(cur)
            return row_to_session(r) if r else None

    def list_for_coach_between(self, *, coach_id: int, start: datetime, end: datetime) -> Sequence[TrainingSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {columns(SESSION_COLUMNS, table="s")}
                FROM training_sessions s
                JOIN age_groups ag ON ag.age_group_id = s.age_group_id
                WHERE ag.coach_id=%s AND s.session_date >= %s AND s.session_date < %s
                ORDER BY FIELD(s.time_slot, 'MORNING', 'EVENING'), s.session_date ASC, s.session_id ASC
                """,
                (int(coach_id), start, end),
            )
            return [row_to_session(r) for r in fetchall(cur)]

    def update_status(self, *, session_id: int, status: SessionStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE training_sessions SET status=%s WHERE session_id=%s",
                (status.value, int(session_id)),
            )
            return cur.rowcount > 0

    def update_group_photo(self, *, session_id: int, photo: Optional[str]) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE training_sessions SET group_photo=%s WHERE session_id=%s",
                (photo, int(session_id)),
            )
            return cur.rowcount > 0
