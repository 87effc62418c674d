from collections import defaultdict
import math
from datetime import date
from types import SimpleNamespace
from typing import AbstractSet, Dict, List
import logging

from core.coherence_rules import BLOCKING, Issue, define_coherence_rules, make_issue
from core.constraint_manager import ConstraintManager
from core.state import Plan, ShiftConfig
from utils.constants import HOURS_TOLERANCE
from utils.date_utils import is_weekend

logger = logging.getLogger(__name__)


def _hours_by_date(plan: Plan) -> Dict[date, Dict[str, float]]:
    """date -> {module code: hours}, module codes kept in plan order."""
    by_date: Dict[date, Dict[str, float]] = defaultdict(dict)
    for ms in plan:
        for s in ms.sessions:
            by_date[s.date][ms.code] = by_date[s.date].get(ms.code, 0) + s.hours
    return by_date


def check_daily_capacity(plan: Plan, state) -> List[Issue]:
    """One issue per date whose combined hours exceed the shift capacity."""
    issues = []
    cap = state.shift.hours_per_day
    for day, per_module in sorted(_hours_by_date(plan).items()):
        total = sum(per_module.values())
        codes = list(per_module)
        if total > cap and not math.isclose(total, cap, abs_tol=HOURS_TOLERANCE):
            rule_id = "capacity_exceeded"
        elif len(codes) > 1:
            rule_id = "shared_day"
        else:
            continue
        issues.append(
            make_issue(
                rule_id,
                state.rules,
                date=day.isoformat(),
                day=day,
                hours=total,
                cap=cap,
                codes=", ".join(codes),
                module_codes=codes,
            )
        )
    return issues


def check_hours_integrity(plan: Plan, state) -> List[Issue]:
    issues = []
    for ms in plan:
        assigned = ms.hours_assigned
        if not math.isclose(assigned, ms.hours_total, abs_tol=HOURS_TOLERANCE):
            issues.append(
                make_issue(
                    "hours_mismatch",
                    state.rules,
                    code=ms.code,
                    assigned=assigned,
                    total=ms.hours_total,
                    module_id=ms.id,
                    module_codes=[ms.code],
                )
            )
    return issues


def check_weekend_policy(plan: Plan, state) -> List[Issue]:
    return [
        make_issue(
            "weekend_not_allowed",
            state.rules,
            code=ms.code,
            date=s.date.isoformat(),
            day=s.date,
            module_id=ms.id,
            module_codes=[ms.code],
        )
        for ms in plan
        for s in ms.sessions
        if is_weekend(s.date)
    ]


def check_holiday_policy(plan: Plan, state) -> List[Issue]:
    """Excluded dates that are also forbidden weekends are left to the weekend check."""
    weekend_checked = not state.shift.allow_weekends
    return [
        make_issue(
            "holiday_not_allowed",
            state.rules,
            code=ms.code,
            date=s.date.isoformat(),
            day=s.date,
            module_id=ms.id,
            module_codes=[ms.code],
        )
        for ms in plan
        for s in ms.sessions
        if s.date in state.excluded and not (weekend_checked and is_weekend(s.date))
    ]


def verify(
    plan: Plan,
    shift: ShiftConfig,
    excluded: AbstractSet[date] = frozenset(),
) -> List[Issue]:
    """
    Scan a plan for coherence issues. Every check runs; an empty list means clean.

    Checks:
        - combined hours per date against the shift capacity (and shared days under it),
        - per-module assigned hours against the declared total,
        - sessions on weekends / excluded dates when the shift does not permit them.
    """
    state = SimpleNamespace(
        shift=shift,
        excluded=frozenset(excluded),
        rules=define_coherence_rules(),
    )
    manager = ConstraintManager(plan, state)
    manager.add_rule(check_daily_capacity)
    manager.add_rule(check_hours_integrity)
    manager.add_rule(check_weekend_policy, condition=not shift.allow_weekends)
    manager.add_rule(check_holiday_policy, condition=not shift.allow_holidays)

    issues = manager.apply_all()
    if issues:
        blocking = sum(1 for i in issues if i.severity == BLOCKING)
        logger.info(f"⚠️ {len(issues)} coherence issue(s), {blocking} blocking.")
    return issues


def is_coherent(issues: List[Issue]) -> bool:
    """True when no issue is blocking."""
    return not any(i.blocking for i in issues)
