from dataclasses import dataclass, replace
from datetime import date
import logging
from typing import AbstractSet, List

from core.state import ModuleSchedule, Plan, ShiftConfig, plan_index
from exceptions.custom_errors import InvalidDateError, UnknownModuleError
from planner.generator import next_working_day, schedule_module
from utils.date_utils import normalise_date

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CascadeResult:
    plan: Plan
    """The recalculated plan. The input plan is left untouched."""
    affected_count: int
    """1 (the moved module) + downstream modules whose sessions changed."""


def _locate(plan: Plan, module_id: str) -> int:
    index = plan_index(plan).get(module_id)
    if index is None:
        raise UnknownModuleError(f"Module {module_id!r} is not part of the plan.")
    return index


def _chain(
    plan: Plan,
    first: int,
    cursor: date,
    shift: ShiftConfig,
    excluded: AbstractSet[date],
) -> List[ModuleSchedule]:
    """Regenerate plan[first:] from `cursor`, each module starting where the previous one ended."""
    regenerated = []
    for ms in plan[first:]:
        sessions, cursor = schedule_module(ms.module, cursor, shift, excluded)
        regenerated.append(ms.with_sessions(sessions))
    return regenerated


def move_module(
    plan: Plan,
    module_id: str,
    new_start_date,
    shift: ShiftConfig,
    excluded: AbstractSet[date],
) -> CascadeResult:
    """
    Move a module's start date and cascade the change to every later module.

    The moved module is regenerated from `new_start_date`. The modules after
    it are regenerated in order from the first working day strictly after the
    moved module's last session. Modules before it are kept as they are.

    Args:
        plan (Plan): Current plan snapshot.
        module_id (str): Id of the module to move.
        new_start_date (date | str): New first candidate day for the module.
        shift (ShiftConfig): Daily capacity and weekend/holiday permits.
        excluded (AbstractSet[date]): Resolved holiday dates.

    Returns:
        CascadeResult: new plan and the number of affected modules.

    Raises:
        UnknownModuleError: `module_id` is not in the plan.
        InvalidDateError: unparseable `new_start_date`.
        CascadeAmbiguityError: no working day within the look-ahead window.
    """
    index = _locate(plan, module_id)
    start = normalise_date(new_start_date)
    excluded = frozenset(excluded)

    target = plan[index]
    sessions, _ = schedule_module(target.module, start, shift, excluded)
    moved = target.with_sessions(sessions)

    if moved.sessions:
        cursor = next_working_day(moved.end, shift, excluded)
    else:
        cursor = start

    downstream = _chain(plan, index + 1, cursor, shift, excluded)
    changed = sum(
        1 for old, new in zip(plan[index + 1:], downstream) if old.sessions != new.sessions
    )
    affected = 1 + changed

    logger.info(
        f"🔁 Cascade from {target.code}: start {target.start} -> {moved.start}, "
        f"{affected} module(s) affected."
    )
    new_plan = list(plan[:index]) + [moved] + downstream
    return CascadeResult(plan=new_plan, affected_count=affected)


def regenerate_from(
    plan: Plan,
    index: int,
    shift: ShiftConfig,
    excluded: AbstractSet[date],
    start_date=None,
) -> Plan:
    """
    Regenerate every module from `index` forward, e.g. after a shift change.

    `start_date` defaults to the current start of plan[index]; a module
    without sessions then falls back to the day after the previous module's
    last session.
    """
    if not 0 <= index < len(plan):
        raise UnknownModuleError(f"Plan has no module at position {index}.")

    if start_date is not None:
        cursor = normalise_date(start_date)
    elif plan[index].start is not None:
        cursor = plan[index].start
    else:
        previous_end = next((ms.end for ms in reversed(plan[:index]) if ms.end), None)
        if previous_end is None:
            raise InvalidDateError(
                f"Cannot infer a start date for {plan[index].code}; pass start_date."
            )
        cursor = next_working_day(previous_end, shift, frozenset(excluded))

    return list(plan[:index]) + _chain(plan, index, cursor, shift, frozenset(excluded))


def move_session(plan: Plan, module_id: str, original_date, new_date) -> Plan:
    """
    Move a single session of a module to another date, without cascading.

    Sessions are re-sorted chronologically. Any conflict this introduces is
    left for the verifier to report.
    """
    index = _locate(plan, module_id)
    original = normalise_date(original_date)
    target_date = normalise_date(new_date)

    target = plan[index]
    if original not in target.dates:
        raise InvalidDateError(f"{target.code} has no session on {original.isoformat()}.")

    sessions = [
        replace(s, date=target_date) if s.date == original else s
        for s in target.sessions
    ]
    sessions.sort(key=lambda s: s.date)
    logger.debug(f"{target.code}: session {original} moved to {target_date}")

    new_plan = list(plan)
    new_plan[index] = target.with_sessions(sessions)
    return new_plan
