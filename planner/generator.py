from datetime import date
from typing import AbstractSet, Iterable, List

from core.state import Module, ModuleSchedule, Session, ShiftConfig
from exceptions.custom_errors import CascadeAmbiguityError
from utils.constants import HOURS_DECIMALS, MAX_LOOKAHEAD_DAYS
from utils.date_utils import add_days, is_weekend, normalise_date
from utils.validate import validate_modules


def is_working_day(day: date, shift: ShiftConfig, excluded: AbstractSet[date]) -> bool:
    """
    A day can hold a session unless it is a weekend without `allow_weekends`,
    or an excluded date without `allow_holidays`. A holiday on a weekend is
    still a single non-working day.
    """
    if is_weekend(day) and not shift.allow_weekends:
        return False
    if day in excluded and not shift.allow_holidays:
        return False
    return True


def next_working_day(
    day: date,
    shift: ShiftConfig,
    excluded: AbstractSet[date],
    inclusive: bool = False,
) -> date:
    """
    First working day after `day` (or from `day` when `inclusive`).

    Raises:
        CascadeAmbiguityError: If no working day exists within MAX_LOOKAHEAD_DAYS.
    """
    cursor = day if inclusive else add_days(day, 1)
    skipped = 0
    while not is_working_day(cursor, shift, excluded):
        skipped += 1
        if skipped > MAX_LOOKAHEAD_DAYS:
            raise CascadeAmbiguityError(
                f"No working day found within {MAX_LOOKAHEAD_DAYS} days after {day.isoformat()}."
            )
        cursor = add_days(cursor, 1)
    return cursor


def add_working_days(
    day: date, n: int, shift: ShiftConfig, excluded: AbstractSet[date]
) -> date:
    """Move `day` forward by `n` working days (n >= 0). With n == 0, the first working day from `day`."""
    cursor = next_working_day(day, shift, excluded, inclusive=True)
    for _ in range(n):
        cursor = next_working_day(cursor, shift, excluded)
    return cursor


def schedule_module(
    module: Module,
    cursor: date,
    shift: ShiftConfig,
    excluded: AbstractSet[date],
):
    """
    Consume one module's hours from `cursor`.

    Returns the module's sessions and the cursor after its last session. A
    module with no hours returns no sessions and the cursor unchanged.
    """
    sessions: List[Session] = []
    remaining = round(module.hours_total, HOURS_DECIMALS)
    while remaining > 0:
        cursor = next_working_day(cursor, shift, excluded, inclusive=True)
        hours = min(shift.hours_per_day, remaining)
        sessions.append(Session(module_id=module.id, date=cursor, hours=hours))
        # rounded so float residue never becomes an extra session
        remaining = round(remaining - hours, HOURS_DECIMALS)
        cursor = add_days(cursor, 1)
    return sessions, cursor


def generate(
    modules: Iterable[Module],
    start_date,
    shift: ShiftConfig,
    excluded: AbstractSet[date],
) -> List[ModuleSchedule]:
    """
    Generate the dated sessions of every module, strictly in input order.

    A single cursor runs from `start_date` through all modules; each module
    begins where the previous one stopped. Non-working days are skipped
    without consuming hours.

    Args:
        modules (Iterable[Module]): Modules in certificate order.
        start_date (date | str): First candidate day.
        shift (ShiftConfig): Daily capacity and weekend/holiday permits.
        excluded (AbstractSet[date]): Resolved holiday dates.

    Returns:
        List[ModuleSchedule]: One entry per module, in input order.

    Raises:
        InvalidModuleError: malformed module feed.
        InvalidDateError: unparseable start date.
        CascadeAmbiguityError: no working day within the look-ahead window.
    """
    modules = validate_modules(modules)
    cursor = normalise_date(start_date)
    excluded = frozenset(excluded)

    plan: List[ModuleSchedule] = []
    for module in modules:
        sessions, cursor = schedule_module(module, cursor, shift, excluded)
        plan.append(ModuleSchedule(module=module, sessions=tuple(sessions)))
    return plan
