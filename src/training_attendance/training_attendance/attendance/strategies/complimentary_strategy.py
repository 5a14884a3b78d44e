from __future__ import annotations

from ...players.model import TrainingPlan
from .base import PlanCounter, QuotaDecision, QuotaStrategy


class ComplimentaryStrategy(QuotaStrategy):
    """Free session: consumes a complimentary credit while any are left."""

    def decide(self, plan: TrainingPlan, *, cap: int) -> QuotaDecision:
        if plan.complimentary_used < cap:
            return QuotaDecision(counter=PlanCounter.COMPLIMENTARY_USED)
        # Mark is still stored as complimentary; the plan just isn't charged.
        return QuotaDecision(note="complimentary cap reached")
