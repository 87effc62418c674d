from datetime import date

from core.coherence_rules import ADVISORY, BLOCKING
from core.state import Module, ModuleSchedule, Session, ShiftConfig
from planner.cascade import move_session
from planner.verifier import is_coherent, verify


def _rule_ids(issues):
    return [i.rule_id for i in issues]


def test_generated_plan_is_clean(plan, shift, excluded):
    issues = verify(plan, shift, excluded)
    assert issues == []
    assert is_coherent(issues)


def test_overlap_reported_once_with_both_codes(plan, shift, excluded):
    mf1 = plan[0]
    injected = mf1.with_sessions(mf1.sessions + (Session("MF1", date(2026, 7, 29), 5),))
    broken = [injected] + plan[1:]

    issues = verify(broken, shift, excluded)
    capacity = [i for i in issues if i.rule_id == "capacity_exceeded"]

    assert len(capacity) == 1
    assert capacity[0].date == date(2026, 7, 29)
    assert set(capacity[0].module_codes) == {"MF1330_1", "MF1331_1"}
    assert capacity[0].severity == BLOCKING
    assert "10h" in capacity[0].message
    # the injected session also breaks MF1's hour total
    assert sorted(_rule_ids(issues)) == ["capacity_exceeded", "hours_mismatch"]
    assert not is_coherent(issues)


def test_missing_hours_reported(plan, shift, excluded):
    mf3 = plan[2]
    truncated = plan[:2] + [mf3.with_sessions(mf3.sessions[:-1])]

    issues = verify(truncated, shift, excluded)
    assert _rule_ids(issues) == ["hours_mismatch"]
    assert issues[0].module_id == "MF3"
    assert "25h assigned vs 30h required" in issues[0].message


def test_weekend_session_depends_on_permit(plan, shift, excluded):
    moved = move_session(plan, "MF1", "2026-07-28", "2026-07-25")

    issues = verify(moved, shift, excluded)
    assert _rule_ids(issues) == ["weekend_not_allowed"]
    assert issues[0].date == date(2026, 7, 25)

    weekends = ShiftConfig(fixed_hours=5, allow_weekends=True)
    assert verify(moved, weekends, excluded) == []


def test_holiday_session_depends_on_permit(plan, shift):
    excluded = frozenset({date(2026, 7, 22)})

    issues = verify(plan, shift, excluded)
    assert _rule_ids(issues) == ["holiday_not_allowed"]
    assert issues[0].module_id == "MF1"

    holidays = ShiftConfig(fixed_hours=5, allow_holidays=True)
    assert verify(plan, holidays, excluded) == []


def test_shared_day_under_capacity_is_advisory():
    day = date(2026, 7, 21)
    plan = [
        ModuleSchedule(Module("A", "MF0001_2", 3), (Session("A", day, 3),)),
        ModuleSchedule(Module("B", "MF0002_2", 3), (Session("B", day, 3),)),
    ]
    issues = verify(plan, ShiftConfig(fixed_hours=8))

    assert _rule_ids(issues) == ["shared_day"]
    assert issues[0].severity == ADVISORY
    assert is_coherent(issues)


def test_every_check_runs(plan, shift, excluded):
    broken = move_session(plan, "MF1", "2026-07-28", "2026-07-25")
    broken = move_session(broken, "MF1", "2026-07-27", "2026-07-29")
    mf3 = broken[2]
    broken = broken[:2] + [mf3.with_sessions(mf3.sessions[:-1])]

    rule_ids = set(_rule_ids(verify(broken, shift, excluded)))
    assert rule_ids == {"capacity_exceeded", "hours_mismatch", "weekend_not_allowed"}


def test_fractional_hours_sum_within_tolerance():
    shift = ShiftConfig(start_hour="08:20", end_hour="14:00")
    days = [date(2026, 7, 21), date(2026, 7, 22), date(2026, 7, 23)]
    plan = [
        ModuleSchedule(
            Module("A", "MF0001_2", 10),
            tuple(Session("A", d, h) for d, h in zip(days, [3.33, 3.33, 3.34])),
        )
    ]
    assert verify(plan, shift) == []


def test_saturday_holiday_reported_once(plan, shift, excluded):
    # 2026-08-15 is both a Saturday and a holiday
    moved = move_session(plan, "MF3", "2026-08-21", "2026-08-15")

    assert _rule_ids(verify(moved, shift, excluded)) == ["weekend_not_allowed"]

    weekends = ShiftConfig(fixed_hours=5, allow_weekends=True)
    assert _rule_ids(verify(moved, weekends, excluded)) == ["holiday_not_allowed"]
