from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Optional, Tuple

from core.state import Plan
from utils.constants import DAYS_PER_WEEK


@dataclass(frozen=True)
class PlanMetrics:
    span_start: Optional[date]
    span_end: Optional[date]
    total_working_days: int
    """Distinct dates holding at least one session."""
    hours_per_week_avg: float
    """Assigned hours over the calendar weeks spanned by the plan."""
    per_module_range: Dict[str, Optional[Tuple[date, date]]] = field(default_factory=dict)
    total_modules: int = 0
    total_sessions: int = 0
    total_hours: float = 0
    assigned_hours: float = 0
    remaining_hours: float = 0
    completion_pct: int = 0


def metrics(plan: Plan) -> PlanMetrics:
    """
    Summary figures for the dashboard.

    Pure read-only projection: incoherent plans are summarised as they are,
    validation belongs to the verifier.
    """
    all_dates = set()
    per_module_range: Dict[str, Optional[Tuple[date, date]]] = {}
    total_hours = 0
    assigned_hours = 0
    total_sessions = 0

    for ms in plan:
        total_hours += ms.hours_total
        assigned_hours += ms.hours_assigned
        total_sessions += len(ms.sessions)
        dates = ms.dates
        all_dates.update(dates)
        # manual session moves can leave a module out of order
        per_module_range[ms.id] = (min(dates), max(dates)) if dates else None

    span_start = min(all_dates) if all_dates else None
    span_end = max(all_dates) if all_dates else None

    if span_start is not None:
        weeks = ((span_end - span_start).days + 1) / DAYS_PER_WEEK
        hours_per_week = round(assigned_hours / weeks, 2)
    else:
        hours_per_week = 0.0

    return PlanMetrics(
        span_start=span_start,
        span_end=span_end,
        total_working_days=len(all_dates),
        hours_per_week_avg=hours_per_week,
        per_module_range=per_module_range,
        total_modules=len(plan),
        total_sessions=total_sessions,
        total_hours=total_hours,
        assigned_hours=assigned_hours,
        remaining_hours=total_hours - assigned_hours,
        completion_pct=round(assigned_hours / total_hours * 100) if total_hours > 0 else 0,
    )
