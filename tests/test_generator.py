from datetime import date, timedelta
import math

import pytest

from core.holidays import resolve_excluded
from core.state import Module, ShiftConfig
from exceptions.custom_errors import (
    CascadeAmbiguityError,
    InvalidDateError,
    InvalidModuleError,
)
from planner.generator import add_working_days, generate, is_working_day, next_working_day

from conftest import START


def test_sequential_plan_skips_weekends_and_holidays(plan):
    mf1, mf2, mf3 = plan

    assert (mf1.start, mf1.end) == (date(2026, 7, 21), date(2026, 7, 28))
    assert (mf2.start, mf2.end) == (date(2026, 7, 29), date(2026, 8, 13))
    assert (mf3.start, mf3.end) == (date(2026, 8, 14), date(2026, 8, 21))

    all_dates = [d for ms in plan for d in ms.dates]
    assert len(all_dates) == 24
    assert len(set(all_dates)) == 24  # no two modules share a date
    assert all(d.weekday() < 5 for d in all_dates)


def test_same_plan_with_resolved_island_calendar(modules, shift):
    excluded = resolve_excluded("canarias", "tenerife", (2026, 2026))
    plan = generate(modules, START, shift, excluded)
    assert plan[-1].end == date(2026, 8, 21)


def test_input_order_and_hours_preserved(plan, modules):
    assert [ms.id for ms in plan] == [m.id for m in modules]
    for ms, module in zip(plan, modules):
        assert ms.hours_assigned == module.hours_total


def test_session_count_is_ceil_of_hours_over_capacity(shift):
    plan = generate([Module(id="A", code="MF0001_2", hours_total=23)], START, shift, frozenset())
    sessions = plan[0].sessions

    assert len(sessions) == math.ceil(23 / 5)
    assert [s.hours for s in sessions] == [5, 5, 5, 5, 3]


def test_zero_hour_module_has_no_sessions_and_keeps_cursor(shift):
    modules = [
        Module(id="A", code="MF0001_2", hours_total=10),
        Module(id="B", code="MF0002_2", hours_total=0),
        Module(id="C", code="MF0003_2", hours_total=5),
    ]
    a, b, c = generate(modules, START, shift, frozenset())

    assert b.sessions == ()
    assert b.start is None
    assert a.end == date(2026, 7, 22)
    assert c.start == date(2026, 7, 23)


def test_generation_is_deterministic(modules, shift, excluded):
    assert generate(modules, START, shift, excluded) == generate(modules, START, shift, excluded)


def test_start_date_as_string(modules, shift, excluded, plan):
    assert generate(modules, "2026-07-21", shift, excluded) == plan


def test_unparseable_start_date(modules, shift):
    with pytest.raises(InvalidDateError):
        generate(modules, "2026-13-40", shift, frozenset())


def test_weekday_holiday_is_skipped(shift):
    plan = generate(
        [Module(id="A", code="MF0001_2", hours_total=10)],
        START,
        shift,
        frozenset({date(2026, 7, 22)}),
    )
    assert plan[0].dates == (date(2026, 7, 21), date(2026, 7, 23))


def test_permits_open_weekends_and_holidays():
    module = [Module(id="A", code="MF0001_2", hours_total=10)]

    weekends = ShiftConfig(fixed_hours=5, allow_weekends=True)
    saturday = date(2026, 7, 25)
    assert generate(module, saturday, weekends, frozenset())[0].dates == (
        saturday,
        date(2026, 7, 26),
    )

    holidays = ShiftConfig(fixed_hours=5, allow_holidays=True)
    plan = generate(module, START, holidays, frozenset({date(2026, 7, 22)}))
    assert plan[0].dates == (date(2026, 7, 21), date(2026, 7, 22))


def test_holiday_on_weekend_is_one_non_working_day(shift, excluded):
    # 2026-08-15 is a Saturday
    assert not is_working_day(date(2026, 8, 15), shift, excluded)
    assert next_working_day(date(2026, 8, 14), shift, excluded) == date(2026, 8, 17)


def test_add_working_days(shift, excluded):
    assert add_working_days(date(2026, 7, 29), 3, shift, excluded) == date(2026, 8, 3)
    assert add_working_days(date(2026, 7, 25), 0, shift, excluded) == date(2026, 7, 27)


def test_no_working_day_within_lookahead(shift, modules):
    every_day = frozenset(START + timedelta(days=i) for i in range(400))
    with pytest.raises(CascadeAmbiguityError):
        generate(modules, START, shift, every_day)


def test_malformed_module_feed(shift):
    duplicated = [
        Module(id="A", code="MF0001_2", hours_total=10),
        Module(id="A", code="MF0002_2", hours_total=10),
    ]
    with pytest.raises(InvalidModuleError, match="Duplicate module ids: A"):
        generate(duplicated, START, shift, frozenset())

    with pytest.raises(InvalidModuleError, match="negative hours"):
        generate([Module(id="A", code="MF0001_2", hours_total=-1)], START, shift, frozenset())


def test_fractional_shift_leaves_no_residue_session():
    shift = ShiftConfig(start_hour="08:20", end_hour="14:00")
    modules = [
        Module(id="A", code="MF0001_2", hours_total=17),
        Module(id="B", code="MF0002_2", hours_total=5),
    ]
    a, b = generate(modules, START, shift, frozenset())

    assert [s.hours for s in a.sessions] == [5.67, 5.67, 5.66]
    assert a.end == date(2026, 7, 23)
    assert b.start == date(2026, 7, 24)
