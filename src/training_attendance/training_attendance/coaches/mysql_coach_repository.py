from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AgeGroup, Coach
from .repository import CoachRepository


def _row_to_coach(row: dict) -> Coach:
    return Coach(
        coach_id=int(row["coach_id"]),
        username=row["username"],
        password_hash=row["password_hash"],
        name=row["name"],
        email=row["email"],
    )


class MySQLCoachRepository(CoachRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, coach_id: int) -> Optional[Coach]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT coach_id, username, password_hash, name, email
                FROM coaches
                WHERE coach_id=%s
                """,
                (int(coach_id),),
            )
            row = fetchone(cur)
            return _row_to_coach(row) if row else None

    def get_by_username(self, username: str) -> Optional[Coach]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT coach_id, username, password_hash, name, email
                FROM coaches
                WHERE username=%s
                """,
                (username,),
            )
            row = fetchone(cur)
            return _row_to_coach(row) if row else None

    def list_age_groups(self, coach_id: int) -> Sequence[AgeGroup]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT age_group_id, name, description, min_age, max_age, coach_id
                FROM age_groups
                WHERE coach_id=%s
                ORDER BY min_age ASC
                """,
                (int(coach_id),),
            )
            return [
                AgeGroup(
                    age_group_id=int(r["age_group_id"]),
                    name=r["name"],
                    description=r.get("description"),
                    min_age=int(r["min_age"]),
                    max_age=int(r["max_age"]),
                    coach_id=int(r["coach_id"]),
                )
                for r in fetchall(cur)
            ]
