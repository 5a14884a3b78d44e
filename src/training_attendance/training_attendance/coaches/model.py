from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Coach:
    """Domain entity: a coach who logs in and owns age groups.

    Note: plain data object (no DB access code).
    """

    coach_id: int
    username: str
    password_hash: str
    name: str
    email: str


@dataclass(frozen=True)
class AgeGroup:
    age_group_id: int
    name: str
    min_age: int
    max_age: int
    coach_id: int
    description: Optional[str] = None
