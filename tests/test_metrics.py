from datetime import date

from core.state import Module, ModuleSchedule, Session
from planner.metrics import metrics
from utils.helpers.plan_payload import calendar_grid, summary_frame


def test_metrics_of_generated_plan(plan):
    summary = metrics(plan)

    assert summary.span_start == date(2026, 7, 21)
    assert summary.span_end == date(2026, 8, 21)
    assert summary.total_working_days == 24
    # 120h over 32 calendar days
    assert summary.hours_per_week_avg == 26.25
    assert summary.per_module_range["MF2"] == (date(2026, 7, 29), date(2026, 8, 13))
    assert summary.total_modules == 3
    assert summary.total_sessions == 24
    assert summary.assigned_hours == summary.total_hours == 120
    assert summary.remaining_hours == 0
    assert summary.completion_pct == 100


def test_metrics_of_empty_plan():
    summary = metrics([])
    assert summary.span_start is None
    assert summary.span_end is None
    assert summary.total_working_days == 0
    assert summary.hours_per_week_avg == 0.0
    assert summary.completion_pct == 0


def test_metrics_of_partial_plan():
    plan = [
        ModuleSchedule(
            Module("A", "MF0001_2", 10),
            (Session("A", date(2026, 7, 22), 5), Session("A", date(2026, 7, 21), 5)),
        ),
        ModuleSchedule(Module("B", "MF0002_2", 10)),
    ]
    summary = metrics(plan)

    assert summary.per_module_range == {
        "A": (date(2026, 7, 21), date(2026, 7, 22)),
        "B": None,
    }
    assert summary.remaining_hours == 10
    assert summary.completion_pct == 50
    assert summary.total_working_days == 2


def test_metrics_do_not_modify_plan(plan):
    before = list(plan)
    metrics(plan)
    assert plan == before


def test_summary_and_calendar_frames(plan):
    summary = summary_frame(plan)
    assert summary["horasAsignadas"].tolist() == [30, 60, 30]
    assert summary.loc[2, "fin"] == "2026-08-21"

    grid = calendar_grid(plan)
    assert list(grid.columns) == ["MF1330_1", "MF1331_1", "MF1332_1"]
    assert len(grid) == 24
    assert grid.loc[date(2026, 7, 29), "MF1331_1"] == 5
    assert grid.loc[date(2026, 7, 29), "MF1330_1"] == 0
