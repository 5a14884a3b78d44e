from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ...players.model import TrainingPlan


class PlanCounter(str, Enum):
    SESSIONS_USED = "sessions_used"
    COMPLIMENTARY_USED = "complimentary_used"


@dataclass(frozen=True)
class QuotaDecision:
    """Which plan counter (if any) a mark consumes."""

    counter: Optional[PlanCounter] = None
    note: Optional[str] = None


class QuotaStrategy(ABC):
    """Strategy Pattern: encapsulate how a mark affects the active plan."""

    # False when no counter can ever be chosen, so the plan row is not locked.
    consumes_quota: bool = True

    @abstractmethod
    def decide(self, plan: TrainingPlan, *, cap: int) -> QuotaDecision:
        raise NotImplementedError
