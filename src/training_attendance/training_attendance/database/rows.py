"""Row -> domain mappers shared by the MySQL repositories.

Joined queries alias columns with a prefix (``p_``, ``s_``, ``tp_``, ``a_``)
so one result row can carry several entities.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from ..attendance.model import Attendance
from ..core.enums import AttendanceStatus, SessionStatus, TimeSlot
from ..players.model import Player, TrainingPlan
from ..sessions.model import TrainingSession

PLAYER_COLUMNS = "{t}.player_id AS {p}player_id, {t}.name AS {p}name, {t}.email AS {p}email, " \
    "{t}.phone AS {p}phone, {t}.date_of_birth AS {p}date_of_birth, {t}.age_group_id AS {p}age_group_id"

SESSION_COLUMNS = "{t}.session_id AS {p}session_id, {t}.session_date AS {p}session_date, " \
    "{t}.time_slot AS {p}time_slot, {t}.status AS {p}status, {t}.max_players AS {p}max_players, " \
    "{t}.group_photo AS {p}group_photo, {t}.age_group_id AS {p}age_group_id"

PLAN_COLUMNS = "{t}.plan_id AS {p}plan_id, {t}.player_id AS {p}player_id, " \
    "{t}.sessions_booked AS {p}sessions_booked, {t}.sessions_used AS {p}sessions_used, " \
    "{t}.complimentary_used AS {p}complimentary_used, {t}.start_date AS {p}start_date, " \
    "{t}.end_date AS {p}end_date, {t}.is_active AS {p}is_active"

ATTENDANCE_COLUMNS = "{t}.attendance_id AS {p}attendance_id, {t}.player_id AS {p}player_id, " \
    "{t}.session_id AS {p}session_id, {t}.status AS {p}status, " \
    "{t}.is_complimentary AS {p}is_complimentary, {t}.photo AS {p}photo, " \
    "{t}.notes AS {p}notes, {t}.marked_at AS {p}marked_at"


def columns(template: str, *, table: str, prefix: str = "") -> str:
    return template.format(t=table, p=prefix)


def row_to_player(r: Dict[str, Any], prefix: str = "") -> Player:
    return Player(
        player_id=int(r[f"{prefix}player_id"]),
        name=r[f"{prefix}name"],
        email=r.get(f"{prefix}email"),
        phone=r.get(f"{prefix}phone"),
        date_of_birth=r[f"{prefix}date_of_birth"],
        age_group_id=int(r[f"{prefix}age_group_id"]),
    )


def row_to_session(r: Dict[str, Any], prefix: str = "") -> TrainingSession:
    return TrainingSession(
        session_id=int(r[f"{prefix}session_id"]),
        session_date=r[f"{prefix}session_date"],
        time_slot=TimeSlot(r[f"{prefix}time_slot"]),
        status=SessionStatus(r[f"{prefix}status"]),
        max_players=int(r[f"{prefix}max_players"]),
        group_photo=r.get(f"{prefix}group_photo"),
        age_group_id=int(r[f"{prefix}age_group_id"]),
    )


def row_to_plan(r: Dict[str, Any], prefix: str = "") -> Optional[TrainingPlan]:
    # LEFT JOINs leave every plan column NULL when there is no active plan.
    if r.get(f"{prefix}plan_id") is None:
        return None
    return TrainingPlan(
        plan_id=int(r[f"{prefix}plan_id"]),
        player_id=int(r[f"{prefix}player_id"]),
        sessions_booked=int(r[f"{prefix}sessions_booked"]),
        sessions_used=int(r[f"{prefix}sessions_used"]),
        complimentary_used=int(r[f"{prefix}complimentary_used"]),
        start_date=r[f"{prefix}start_date"],
        end_date=r[f"{prefix}end_date"],
        is_active=bool(r[f"{prefix}is_active"]),
    )


def row_to_attendance(r: Dict[str, Any], prefix: str = "") -> Attendance:
    return Attendance(
        attendance_id=int(r[f"{prefix}attendance_id"]),
        player_id=int(r[f"{prefix}player_id"]),
        session_id=int(r[f"{prefix}session_id"]),
        status=AttendanceStatus(r[f"{prefix}status"]),
        is_complimentary=bool(r[f"{prefix}is_complimentary"]),
        photo=r.get(f"{prefix}photo"),
        notes=r.get(f"{prefix}notes"),
        marked_at=r[f"{prefix}marked_at"],
    )
