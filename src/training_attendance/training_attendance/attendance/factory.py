from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import AttendanceStatus
from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import QuotaStrategy
from .strategies.complimentary_strategy import ComplimentaryStrategy
from .strategies.regular_strategy import RegularSessionStrategy


@dataclass
class QuotaStrategyFactory:
    """Factory Pattern: choose the quota strategy for an incoming mark."""

    def for_mark(self, *, status: AttendanceStatus, is_complimentary: bool) -> QuotaStrategy:
        if status != AttendanceStatus.PRESENT:
            return AbsentStrategy()
        if is_complimentary:
            return ComplimentaryStrategy()
        return RegularSessionStrategy()
