from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AgeGroup, Coach


class CoachRepository(Protocol):
    """Repository interface for coaches and the age groups they own.

    Note (DIP): services depend on this interface, not on a concrete DB.
    """

    def get_by_id(self, coach_id: int) -> Optional[Coach]:
        raise NotImplementedError

    def get_by_username(self, username: str) -> Optional[Coach]:
        raise NotImplementedError

    def list_age_groups(self, coach_id: int) -> Sequence[AgeGroup]:
        raise NotImplementedError
