from src.training_attendance.training_attendance.attendance.factory import QuotaStrategyFactory
from src.training_attendance.training_attendance.attendance.strategies.absent_strategy import AbsentStrategy
from src.training_attendance.training_attendance.attendance.strategies.base import PlanCounter
from src.training_attendance.training_attendance.attendance.strategies.complimentary_strategy import ComplimentaryStrategy
from src.training_attendance.training_attendance.attendance.strategies.regular_strategy import RegularSessionStrategy
from src.training_attendance.training_attendance.core.enums import AttendanceStatus

from conftest import make_plan


def test_factory_picks_strategy_by_status_and_flag():
    factory = QuotaStrategyFactory()

    assert isinstance(factory.for_mark(status=AttendanceStatus.PRESENT, is_complimentary=False), RegularSessionStrategy)
    assert isinstance(factory.for_mark(status=AttendanceStatus.PRESENT, is_complimentary=True), ComplimentaryStrategy)
    assert isinstance(factory.for_mark(status=AttendanceStatus.ABSENT, is_complimentary=True), AbsentStrategy)


def test_regular_strategy_charges_past_booked_quota():
    decision = RegularSessionStrategy().decide(make_plan(1, 1, booked=12, used=12), cap=3)

    assert decision.counter == PlanCounter.SESSIONS_USED
    assert decision.note == "sessions_booked exceeded"


def test_complimentary_strategy_stops_at_cap():
    strategy = ComplimentaryStrategy()

    assert strategy.decide(make_plan(1, 1, complimentary=2), cap=3).counter == PlanCounter.COMPLIMENTARY_USED
    assert strategy.decide(make_plan(1, 1, complimentary=3), cap=3).counter is None
