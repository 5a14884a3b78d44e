from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.constants import DEFAULT_MAX_PLAYERS
from ..core.enums import SessionStatus, TimeSlot


@dataclass(frozen=True)
class TrainingSession:
    session_id: int
    session_date: datetime
    time_slot: TimeSlot
    status: SessionStatus
    age_group_id: int
    max_players: int = DEFAULT_MAX_PLAYERS
    group_photo: Optional[str] = None
