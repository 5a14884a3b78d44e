from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime
from typing import Iterator, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import conflicts_as_domain_errors, db_cursor, fetchall, fetchone
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
from ..players.model import TrainingPlan
from .model import Attendance, AttendanceRecord, SessionAttendanceRow
from .repository import AttendanceRepository, AttendanceUnitOfWork


class MySQLAttendanceUnitOfWork(AttendanceUnitOfWork):
    """Runs on the cursor of an open transaction; locks are held until it ends."""

    def __init__(self, cur):
        self._cur = cur

    def lock_attendance(self, *, player_id: int, session_id: int) -> Optional[Attendance]:
        # FOR UPDATE on the unique key also gap-locks a missing row, so a
        # concurrent first mark of the same pair waits (or deadlocks -> ConflictError).
        self._cur.execute(
            f"""
            SELECT {columns(ATTENDANCE_COLUMNS, table="a")}
            FROM attendance a
            WHERE a.player_id=%s AND a.session_id=%s
            FOR UPDATE
            """,
            (int(player_id), int(session_id)),
        )
        r = fetchone(self._cur)
        return row_to_attendance(r) if r else None

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
        # LAST_INSERT_ID(expr) makes lastrowid report the existing id on the update path.
        self._cur.execute(
            """
            INSERT INTO attendance(player_id, session_id, status, is_complimentary, photo, notes, marked_at)
            VALUES(%s,%s,%s,%s,%s,%s,%s) AS new
            ON DUPLICATE KEY UPDATE
                attendance_id=LAST_INSERT_ID(attendance_id),
                status=new.status,
                is_complimentary=new.is_complimentary,
                photo=new.photo,
                notes=new.notes,
                marked_at=new.marked_at
            """,
            (
                int(player_id),
                int(session_id),
                status.value,
                1 if is_complimentary else 0,
                photo,
                notes,
                marked_at,
            ),
        )
        return int(self._cur.lastrowid)

    def lock_active_plan(self, player_id: int) -> Optional[TrainingPlan]:
        self._cur.execute(
            f"""
            SELECT {columns(PLAN_COLUMNS, table="tp")}
            FROM training_plans tp
            WHERE tp.player_id=%s AND tp.is_active=1
            ORDER BY tp.plan_id DESC
            LIMIT 1
            FOR UPDATE
            """,
            (int(player_id),),
        )
        r = fetchone(self._cur)
        return row_to_plan(r) if r else None

    def increment_sessions_used(self, *, plan_id: int) -> bool:
        self._cur.execute(
            "UPDATE training_plans SET sessions_used = sessions_used + 1 WHERE plan_id=%s",
            (int(plan_id),),
        )
        return self._cur.rowcount > 0

    def increment_complimentary_used(self, *, plan_id: int, cap: int) -> bool:
        self._cur.execute(
            """
            UPDATE training_plans
            SET complimentary_used = complimentary_used + 1
            WHERE plan_id=%s AND complimentary_used < %s
            """,
            (int(plan_id), int(cap)),
        )
        return self._cur.rowcount > 0

    def get_record(self, attendance_id: int) -> AttendanceRecord:
        self._cur.execute(
            f"""
            SELECT
                {columns(ATTENDANCE_COLUMNS, table="a", prefix="a_")},
                {columns(PLAYER_COLUMNS, table="p", prefix="p_")},
                {columns(SESSION_COLUMNS, table="s", prefix="s_")}
            FROM attendance a
            JOIN players p ON p.player_id = a.player_id
            JOIN training_sessions s ON s.session_id = a.session_id
            WHERE a.attendance_id=%s
            """,
            (int(attendance_id),),
        )
        r = fetchone(self._cur)
        if not r:
            raise LookupError(f"attendance {attendance_id} vanished inside its own transaction")
        return AttendanceRecord(
            attendance=row_to_attendance(r, "a_"),
            player=row_to_player(r, "p_"),
            session=row_to_session(r, "s_"),
        )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @contextmanager
    def unit_of_work(self) -> Iterator[MySQLAttendanceUnitOfWork]:
        with conflicts_as_domain_errors():
            with db_cursor(self._conn_factory) as (_, cur):
                yield MySQLAttendanceUnitOfWork(cur)

    def list_for_session(self, session_id: int) -> Sequence[SessionAttendanceRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT
                    {columns(ATTENDANCE_COLUMNS, table="a", prefix="a_")},
                    {columns(PLAYER_COLUMNS, table="p", prefix="p_")},
                    {columns(PLAN_COLUMNS, table="tp", prefix="tp_")}
                FROM attendance a
                JOIN players p ON p.player_id = a.player_id
                LEFT JOIN training_plans tp ON tp.player_id = p.player_id AND tp.is_active = 1
                WHERE a.session_id=%s
                ORDER BY p.name ASC
                """,
                (int(session_id),),
            )
            return [
                SessionAttendanceRow(
                    attendance=row_to_attendance(r, "a_"),
                    player=row_to_player(r, "p_"),
                    active_plan=row_to_plan(r, "tp_"),
                )
                for r in fetchall(cur)
            ]
