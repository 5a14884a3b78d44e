from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..core.constants import COMPLIMENTARY_CAP
from ..core.enums import AttendanceStatus
from .factory import QuotaStrategyFactory
from .model import AttendanceRecord, SessionAttendanceRow
from .repository import AttendanceRepository, AttendanceUnitOfWork
from .strategies.base import PlanCounter, QuotaStrategy

logger = logging.getLogger(__name__)


class AttendanceQuotaReconciler:
    """Create-or-update a (player, session) attendance and charge the active plan.

    The attendance write and any plan counter change happen in one unit of work.
    Every mark goes through the quota strategy factory; an ABSENT mark picks a
    strategy that consumes nothing, so re-marking a PRESENT row as ABSENT leaves
    earlier increments in place. ``sessions_used`` is allowed to pass
    ``sessions_booked``.

    Callers are expected to have checked that the session belongs to the coach.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        strategy_factory: QuotaStrategyFactory | None = None,
        complimentary_cap: int = COMPLIMENTARY_CAP,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._factory = strategy_factory or QuotaStrategyFactory()
        self._cap = int(complimentary_cap)
        self._clock = clock

    def record_attendance(
        self,
        *,
        player_id: int,
        session_id: int,
        status: AttendanceStatus,
        is_complimentary: bool,
        photo: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> AttendanceRecord:
        with self._attendance.unit_of_work() as uow:
            existing = uow.lock_attendance(player_id=player_id, session_id=session_id)
            attendance_id = uow.save_attendance(
                player_id=player_id,
                session_id=session_id,
                status=status,
                is_complimentary=is_complimentary,
                photo=photo,
                notes=notes,
                marked_at=self._clock(),
            )
            logger.info(
                "%s attendance %s: player=%s session=%s status=%s complimentary=%s",
                "Updated" if existing else "Created",
                attendance_id,
                player_id,
                session_id,
                status.value,
                is_complimentary,
            )

            strategy = self._factory.for_mark(status=status, is_complimentary=is_complimentary)
            self._charge_active_plan(uow, player_id=player_id, strategy=strategy)

            return uow.get_record(attendance_id)

    def _charge_active_plan(self, uow: AttendanceUnitOfWork, *, player_id: int, strategy: QuotaStrategy) -> None:
        if not strategy.consumes_quota:
            return

        plan = uow.lock_active_plan(player_id)
        if not plan:
            logger.debug("Player %s has no active plan; quota unchanged", player_id)
            return

        decision = strategy.decide(plan, cap=self._cap)

        if decision.counter == PlanCounter.SESSIONS_USED:
            uow.increment_sessions_used(plan_id=plan.plan_id)
        elif decision.counter == PlanCounter.COMPLIMENTARY_USED:
            uow.increment_complimentary_used(plan_id=plan.plan_id, cap=self._cap)

        logger.debug(
            "Plan %s: counter=%s note=%s",
            plan.plan_id,
            decision.counter.value if decision.counter else None,
            decision.note,
        )

    def get_attendance_for_session(self, session_id: int) -> Sequence[SessionAttendanceRow]:
        return self._attendance.list_for_session(session_id)
