from __future__ import annotations

import copy
from contextlib import contextmanager
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from src.training_attendance.training_attendance.attendance.model import (
    Attendance,
    AttendanceHistoryRow,
    AttendanceRecord,
    SessionAttendanceRow,
)
from src.training_attendance.training_attendance.coaches.model import AgeGroup, Coach
from src.training_attendance.training_attendance.container import build_services
from src.training_attendance.training_attendance.core.enums import AttendanceStatus, SessionStatus, TimeSlot
from src.training_attendance.training_attendance.players.model import Player, TrainingPlan
from src.training_attendance.training_attendance.sessions.model import TrainingSession

FIXED_NOW = datetime(2026, 2, 1, 9, 0, 0)


@dataclass
class InMemoryDB:
    coaches: dict[int, Coach] = field(default_factory=dict)
    age_groups: dict[int, AgeGroup] = field(default_factory=dict)
    players: dict[int, Player] = field(default_factory=dict)
    plans: dict[int, TrainingPlan] = field(default_factory=dict)
    sessions: dict[int, TrainingSession] = field(default_factory=dict)
    attendance: dict[tuple[int, int], Attendance] = field(default_factory=dict)
    next_attendance_id: int = 1

    def coach_of_age_group(self, age_group_id: int) -> Optional[int]:
        ag = self.age_groups.get(age_group_id)
        return ag.coach_id if ag else None

    def active_plan(self, player_id: int) -> Optional[TrainingPlan]:
        for plan in self.plans.values():
            if plan.player_id == player_id and plan.is_active:
                return plan
        return None


class InMemoryCoaches:
    def __init__(self, db: InMemoryDB):
        self._db = db

    def get_by_id(self, coach_id: int) -> Optional[Coach]:
        return self._db.coaches.get(coach_id)

    def get_by_username(self, username: str) -> Optional[Coach]:
        return next((c for c in self._db.coaches.values() if c.username == username), None)

    def list_age_groups(self, coach_id: int):
        return [ag for ag in self._db.age_groups.values() if ag.coach_id == coach_id]


class InMemorySessions:
    def __init__(self, db: InMemoryDB):
        self._db = db

    def get_for_coach(self, *, coach_id: int, session_id: int) -> Optional[TrainingSession]:
        s = self._db.sessions.get(session_id)
        if not s or self._db.coach_of_age_group(s.age_group_id) != coach_id:
            return None
        return s

    def list_for_coach_between(self, *, coach_id: int, start: datetime, end: datetime):
        items = [
            s
            for s in self._db.sessions.values()
            if self._db.coach_of_age_group(s.age_group_id) == coach_id and start <= s.session_date < end
        ]
        slot_order = {TimeSlot.MORNING: 0, TimeSlot.EVENING: 1}
        return sorted(items, key=lambda s: (slot_order[s.time_slot], s.session_date, s.session_id))

    def update_status(self, *, session_id: int, status: SessionStatus) -> bool:
        s = self._db.sessions.get(session_id)
        if not s:
            return False
        self._db.sessions[session_id] = replace(s, status=status)
        return True

    def update_group_photo(self, *, session_id: int, photo: Optional[str]) -> bool:
        s = self._db.sessions.get(session_id)
        if not s:
            return False
        self._db.sessions[session_id] = replace(s, group_photo=photo)
        return True


class InMemoryPlayers:
    def __init__(self, db: InMemoryDB):
        self._db = db

    def get_for_coach(self, *, coach_id: int, player_id: int) -> Optional[Player]:
        p = self._db.players.get(player_id)
        if not p or self._db.coach_of_age_group(p.age_group_id) != coach_id:
            return None
        return p

    def list_for_coach(self, coach_id: int):
        items = [p for p in self._db.players.values() if self._db.coach_of_age_group(p.age_group_id) == coach_id]
        return sorted(items, key=lambda p: p.name)

    def list_for_age_group(self, age_group_id: int):
        return sorted((p for p in self._db.players.values() if p.age_group_id == age_group_id), key=lambda p: p.name)

    def get_active_plans(self, player_ids):
        out = {}
        for pid in player_ids:
            plan = self._db.active_plan(pid)
            if plan:
                out[pid] = plan
        return out

    def list_history(self, player_ids, *, present_only: bool = False):
        ids = set(player_ids)
        rows = [
            AttendanceHistoryRow(attendance=a, session=self._db.sessions[a.session_id])
            for a in self._db.attendance.values()
            if a.player_id in ids and (not present_only or a.status == AttendanceStatus.PRESENT)
        ]
        rows.sort(key=lambda r: (r.session.session_date, r.attendance.attendance_id), reverse=True)
        return rows


class InMemoryAttendanceUnit:
    def __init__(self, db: InMemoryDB):
        self._db = db

    def lock_attendance(self, *, player_id: int, session_id: int) -> Optional[Attendance]:
        return self._db.attendance.get((player_id, session_id))

    def save_attendance(self, *, player_id, session_id, status, is_complimentary, photo, notes, marked_at) -> int:
        existing = self._db.attendance.get((player_id, session_id))
        if existing:
            attendance_id = existing.attendance_id
        else:
            attendance_id = self._db.next_attendance_id
            self._db.next_attendance_id += 1
        self._db.attendance[(player_id, session_id)] = Attendance(
            attendance_id=attendance_id,
            player_id=player_id,
            session_id=session_id,
            status=status,
            is_complimentary=is_complimentary,
            photo=photo,
            notes=notes,
            marked_at=marked_at,
        )
        return attendance_id

    def lock_active_plan(self, player_id: int) -> Optional[TrainingPlan]:
        return self._db.active_plan(player_id)

    def increment_sessions_used(self, *, plan_id: int) -> bool:
        plan = self._db.plans[plan_id]
        self._db.plans[plan_id] = replace(plan, sessions_used=plan.sessions_used + 1)
        return True

    def increment_complimentary_used(self, *, plan_id: int, cap: int) -> bool:
        plan = self._db.plans[plan_id]
        if plan.complimentary_used >= cap:
            return False
        self._db.plans[plan_id] = replace(plan, complimentary_used=plan.complimentary_used + 1)
        return True

    def get_record(self, attendance_id: int) -> AttendanceRecord:
        a = next(a for a in self._db.attendance.values() if a.attendance_id == attendance_id)
        return AttendanceRecord(
            attendance=a,
            player=self._db.players[a.player_id],
            session=self._db.sessions[a.session_id],
        )


class InMemoryAttendance:
    """Unit of work snapshots attendance + plans and restores them on error."""

    def __init__(self, db: InMemoryDB):
        self._db = db
        self.units_started = 0

    @contextmanager
    def unit_of_work(self):
        self.units_started += 1
        snapshot = (copy.deepcopy(self._db.attendance), copy.deepcopy(self._db.plans), self._db.next_attendance_id)
        try:
            yield InMemoryAttendanceUnit(self._db)
        except Exception:
            self._db.attendance, self._db.plans, self._db.next_attendance_id = snapshot
            raise

    def list_for_session(self, session_id: int):
        return [
            SessionAttendanceRow(
                attendance=a,
                player=self._db.players[a.player_id],
                active_plan=self._db.active_plan(a.player_id),
            )
            for a in self._db.attendance.values()
            if a.session_id == session_id
        ]


def make_plan(plan_id: int, player_id: int, *, booked: int = 12, used: int = 0, complimentary: int = 0, active: bool = True) -> TrainingPlan:
    return TrainingPlan(
        plan_id=plan_id,
        player_id=player_id,
        sessions_booked=booked,
        sessions_used=used,
        complimentary_used=complimentary,
        start_date=date(2026, 1, 1),
        end_date=date(2026, 3, 31),
        is_active=active,
    )


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def db() -> InMemoryDB:
    """Two coaches, one age group each, two players in coach 1's group.

    Player 1 has a 12-session plan, player 2 has no plan, player 3 belongs to coach 2.
    """

    d = InMemoryDB()
    d.coaches[1] = Coach(1, "coach1", generate_password_hash("password123"), "John Smith", "john@football.com")
    d.coaches[2] = Coach(2, "coach2", generate_password_hash("password123"), "Sarah Johnson", "sarah@football.com")
    d.age_groups[10] = AgeGroup(10, "Under 12", 10, 12, coach_id=1, description="Players aged 10-12 years")
    d.age_groups[20] = AgeGroup(20, "Under 16", 13, 16, coach_id=2)
    d.players[1] = Player(1, "Alex Thompson", date(2013, 3, 15), age_group_id=10)
    d.players[2] = Player(2, "Emma Wilson", date(2013, 7, 22), age_group_id=10)
    d.players[3] = Player(3, "Jake Morrison", date(2009, 5, 18), age_group_id=20)
    d.plans[100] = make_plan(100, player_id=1)
    d.plans[101] = make_plan(101, player_id=1, booked=8, used=8, active=False)
    d.sessions[1] = TrainingSession(1, datetime(2026, 2, 1, 18, 0), TimeSlot.EVENING, SessionStatus.SCHEDULED, age_group_id=10)
    d.sessions[2] = TrainingSession(2, datetime(2026, 2, 1, 9, 0), TimeSlot.MORNING, SessionStatus.SCHEDULED, age_group_id=10)
    d.sessions[3] = TrainingSession(3, datetime(2026, 2, 1, 9, 0), TimeSlot.MORNING, SessionStatus.SCHEDULED, age_group_id=20)
    d.sessions[4] = TrainingSession(4, datetime(2026, 1, 25, 9, 0), TimeSlot.MORNING, SessionStatus.COMPLETED, age_group_id=10)
    return d


@pytest.fixture
def attendance_repo(db) -> InMemoryAttendance:
    return InMemoryAttendance(db)


@pytest.fixture
def container(db, attendance_repo):
    return build_services(
        coaches_repo=InMemoryCoaches(db),
        sessions_repo=InMemorySessions(db),
        players_repo=InMemoryPlayers(db),
        attendance_repo=attendance_repo,
        secret_key="test-secret",
    )
