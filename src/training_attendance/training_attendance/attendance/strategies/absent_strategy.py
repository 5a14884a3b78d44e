from __future__ import annotations

from ...players.model import TrainingPlan
from .base import QuotaDecision, QuotaStrategy


class AbsentStrategy(QuotaStrategy):
    """Absence never touches plan counters (and never reverses earlier ones)."""

    consumes_quota = False

    def decide(self, plan: TrainingPlan, *, cap: int) -> QuotaDecision:
        return QuotaDecision()
