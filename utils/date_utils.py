import pandas as pd
from datetime import datetime, timedelta, date as dt_date
from typing import Any, Iterable, FrozenSet
from exceptions.custom_errors import InvalidDateError


def normalise_date(input_date: Any) -> dt_date:
    """
    Convert input to a datetime.date object.
    Supports formats like:
      - '2026-07-21', '2026/07/21', '20260721', date, datetime, pd.Timestamp.
    """
    if isinstance(input_date, pd.Timestamp):
        return input_date.date()
    elif isinstance(input_date, datetime):
        return input_date.date()
    elif isinstance(input_date, dt_date):
        return input_date
    elif isinstance(input_date, str):
        try:
            # pandas handles all common formats using dateutil.parser under the hood
            return pd.to_datetime(input_date.strip(), errors="raise").date()
        except (ValueError, TypeError) as e:
            raise InvalidDateError(f"Could not parse date string '{input_date}': {e}")
    raise InvalidDateError(f"Unsupported date type: {type(input_date)}")


def normalise_dates(values: Iterable[Any]) -> FrozenSet[dt_date]:
    """Normalise a collection of date-likes into a frozenset of dates."""
    return frozenset(normalise_date(v) for v in values)


def add_days(day: dt_date, days: int) -> dt_date:
    return day + timedelta(days=days)


def is_weekend(day: dt_date) -> bool:
    """Saturday or Sunday."""
    return day.weekday() >= 5


def to_iso(day: dt_date) -> str:
    return day.isoformat()


def parse_hour(value: Any) -> float:
    """
    Parse a clock hour into decimal hours.

    Accepts numbers (16, 8.5) and "HH:MM" strings ("08:00", "15:30").
    """
    if isinstance(value, bool):
        raise ValueError(f"Invalid hour value: {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    text = str(value).strip()
    if ":" in text:
        hh, mm = text.split(":", 1)
        return int(hh) + int(mm) / 60
    return float(text)
