from __future__ import annotations

from ...players.model import TrainingPlan
from .base import PlanCounter, QuotaDecision, QuotaStrategy


class RegularSessionStrategy(QuotaStrategy):
    """Paid session: always consumes one booked session, even past sessions_booked."""

    def decide(self, plan: TrainingPlan, *, cap: int) -> QuotaDecision:
        if plan.sessions_used >= plan.sessions_booked:
            return QuotaDecision(counter=PlanCounter.SESSIONS_USED, note="sessions_booked exceeded")
        return QuotaDecision(counter=PlanCounter.SESSIONS_USED)
