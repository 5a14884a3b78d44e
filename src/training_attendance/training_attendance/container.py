from __future__ import annotations

from dataclasses import dataclass

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.reconciler import AttendanceQuotaReconciler
from .attendance.service import AttendanceService
from .coaches.mysql_coach_repository import MySQLCoachRepository
from .coaches.service import AuthService
from .core.constants import DEFAULT_TOKEN_MAX_AGE_SECONDS
from .database.connection import DBConfig, DatabaseConnection
from .players.mysql_player_repository import MySQLPlayerRepository
from .players.service import PlayerService
from .sessions.mysql_session_repository import MySQLSessionRepository
from .sessions.service import SessionService


@dataclass(frozen=True)
class Container:
    auth_service: AuthService
    session_service: SessionService
    player_service: PlayerService
    attendance_service: AttendanceService


def build_services(
    *,
    coaches_repo,
    sessions_repo,
    players_repo,
    attendance_repo,
    secret_key: str,
    token_max_age: int = DEFAULT_TOKEN_MAX_AGE_SECONDS,
) -> Container:
    """Wire services over any repository implementations (MySQL or in-memory)."""

    auth_service = AuthService(coaches_repo, secret_key=secret_key, token_max_age=token_max_age)
    session_service = SessionService(sessions_repo, coaches_repo, players_repo, attendance_repo)
    player_service = PlayerService(players_repo, coaches_repo)
    attendance_service = AttendanceService(
        AttendanceQuotaReconciler(attendance_repo),
        session_service,
        players_repo,
    )

    return Container(
        auth_service=auth_service,
        session_service=session_service,
        player_service=player_service,
        attendance_service=attendance_service,
    )


def build_container(
    *,
    db_config: dict,
    secret_key: str,
    token_max_age: int = DEFAULT_TOKEN_MAX_AGE_SECONDS,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))

    return build_services(
        coaches_repo=MySQLCoachRepository(conn),
        sessions_repo=MySQLSessionRepository(conn),
        players_repo=MySQLPlayerRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        secret_key=secret_key,
        token_max_age=token_max_age,
    )
