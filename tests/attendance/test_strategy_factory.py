from datetime import date, datetime

from timein_system.attendance.factory import AttendanceStrategyFactory
from timein_system.attendance.strategies.late_strategy import LateStrategy
from timein_system.attendance.strategies.on_time_strategy import OnTimeStrategy
from timein_system.core.enums import AttendanceStatus
from timein_system.shifts.model import Shift

SHIFT = Shift.from_config("09:00", "18:00")
TODAY = date(2026, 2, 2)


def test_factory_on_time_at_exact_grace_boundary():
    now = datetime(2026, 2, 2, 9, 1, 0)

    strategy = AttendanceStrategyFactory().for_time_in(now=now, today=TODAY, shift=SHIFT, grace_minutes=1)

    assert isinstance(strategy, OnTimeStrategy)


def test_factory_late_one_second_after_grace():
    now = datetime(2026, 2, 2, 9, 1, 1)

    strategy = AttendanceStrategyFactory().for_time_in(now=now, today=TODAY, shift=SHIFT, grace_minutes=1)

    assert isinstance(strategy, LateStrategy)


def test_factory_without_grace_is_late_after_start_minute():
    now = datetime(2026, 2, 2, 9, 0, 1)

    strategy = AttendanceStrategyFactory().for_time_in(now=now, today=TODAY, shift=SHIFT, grace_minutes=0)

    assert isinstance(strategy, LateStrategy)


def test_late_strategy_counts_minutes_from_shift_start():
    now = datetime(2026, 2, 2, 10, 5, 30)

    decision = LateStrategy().decide_time_in(now=now, today=TODAY, shift=SHIFT)

    assert decision.status == AttendanceStatus.LATE
    assert decision.late_minutes == 65


def test_on_time_strategy_has_no_late_minutes():
    decision = OnTimeStrategy().decide_time_in(now=datetime(2026, 2, 2, 7, 0), today=TODAY, shift=SHIFT)

    assert decision.status == AttendanceStatus.ON_TIME
    assert decision.late_minutes == 0
