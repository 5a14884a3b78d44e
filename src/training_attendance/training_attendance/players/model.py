from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class Player:
    """Domain entity: a player belonging to exactly one age group."""

    player_id: int
    name: str
    date_of_birth: date
    age_group_id: int
    email: Optional[str] = None
    phone: Optional[str] = None


@dataclass(frozen=True)
class TrainingPlan:
    """Prepaid quota. At most one plan per player is active."""

    plan_id: int
    player_id: int
    sessions_booked: int
    sessions_used: int
    complimentary_used: int
    start_date: date
    end_date: date
    is_active: bool = True


@dataclass(frozen=True)
class PlayerStatistics:
    """Read-model derived from attendance rows and the active plan (never stored)."""

    total_attendances: int
    regular_attendances: int
    complimentary_attendances: int
    sessions_booked: int
    sessions_used: int
    complimentary_used: int
    remaining_sessions: int
    remaining_complimentary: int
    attendance_rate: int
