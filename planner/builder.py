import logging
from datetime import date
from typing import Callable, FrozenSet, Iterable, List, Optional, Tuple, TypeVar

from core.coherence_rules import Issue
from core.holidays import academic_year_range, resolve_excluded
from core.state import Module, Plan, RegionSelection, ShiftConfig
from exceptions.custom_errors import CascadeAmbiguityError
from planner.generator import generate
from planner.metrics import PlanMetrics, metrics
from planner.verifier import is_coherent, verify
from utils.constants import MAX_CALENDAR_PASSES
from utils.date_utils import normalise_date
from utils.validate import validate_modules

logger = logging.getLogger(__name__)

T = TypeVar("T")


def calendar_window(
    selection: RegionSelection,
    anchor: Optional[date] = None,
    until: Optional[date] = None,
) -> Tuple[int, int]:
    """
    Civil years whose holidays must be resolved.

    Without an explicit year range, the academic window of `anchor` (or today)
    is used. An ordered window is widened to include the years of `anchor`
    and `until`, so every dated session falls inside it.
    """
    if selection.year_range is not None:
        first, last = (int(y) for y in selection.year_range)
    else:
        first, last = academic_year_range((anchor or date.today()).year)

    if first <= last:
        if anchor is not None:
            first = min(first, anchor.year)
        if until is not None:
            last = max(last, until.year)
    return first, last


def excluded_for(
    selection: RegionSelection,
    anchor: Optional[date] = None,
    until: Optional[date] = None,
) -> FrozenSet[date]:
    """Resolve the excluded dates for a region selection over `calendar_window`."""
    return resolve_excluded(
        selection.region,
        selection.subregion,
        calendar_window(selection, anchor, until),
        selection.extra_dates,
    )


def plan_anchor(plan: Plan) -> Optional[date]:
    """Earliest session date in the plan, used to pick the holiday window."""
    starts = [ms.start for ms in plan if ms.start is not None]
    return min(starts) if starts else None


def plan_end(plan: Plan) -> Optional[date]:
    """Latest session date in the plan."""
    ends = [max(ms.dates) for ms in plan if ms.sessions]
    return max(ends) if ends else None


def with_covering_calendar(
    selection: RegionSelection,
    anchor: date,
    run: Callable[[FrozenSet[date]], T],
    plan_of: Callable[[T], Plan] = lambda result: result,
) -> Tuple[T, FrozenSet[date]]:
    """
    Run a plan computation with a holiday set that covers every year it reaches.

    `run` receives the excluded dates and returns a result holding a plan.
    When the plan ends past the resolved window, the window is widened to
    that year and `run` is repeated; extra holidays only push dates later,
    so this settles within a few passes.

    Raises:
        CascadeAmbiguityError: The plan still outgrows its window after MAX_CALENDAR_PASSES.
    """
    until = None
    for _ in range(MAX_CALENDAR_PASSES):
        window = calendar_window(selection, anchor, until)
        excluded = excluded_for(selection, anchor, until)
        result = run(excluded)
        end = plan_end(plan_of(result))
        if end is None or end.year <= window[1]:
            return result, excluded
        logger.info(
            f"📅 Plan reaches {end.year}; widening the holiday calendar to {window[0]}-{end.year}..."
        )
        until = end

    raise CascadeAmbiguityError(
        f"Holiday calendar did not settle after {MAX_CALENDAR_PASSES} passes."
    )


# == Build Plan ==
def build_plan(
    modules: Iterable[Module],
    start_date,
    shift: ShiftConfig,
    selection: RegionSelection,
) -> Tuple[Plan, List[Issue], PlanMetrics]:
    """
    Builds a course plan from the module feed and the region/turn selection.
    Returns the plan, the coherence issues and the dashboard metrics.
    """
    # === Validate inputs ===
    modules = validate_modules(modules)
    start = normalise_date(start_date)

    # === Calendar & generate ===
    logger.info(
        f"📋 Generating {len(modules)} module(s) from {start} at {shift.hours_per_day:g}h/day..."
    )
    plan, excluded = with_covering_calendar(
        selection, start, lambda excl: generate(modules, start, shift, excl)
    )
    logger.info(
        f"📅 {len(excluded)} excluded date(s) for {selection.region}"
        f"{'/' + selection.subregion if selection.subregion else ''}"
    )

    # === Verify & summarise ===
    issues = verify(plan, shift, excluded)
    summary = metrics(plan)
    if is_coherent(issues):
        logger.info(f"✅ Plan ready: {summary.span_start} -> {summary.span_end}")
    else:
        logger.warning("❌ Plan generated with blocking issues.")

    return plan, issues, summary
