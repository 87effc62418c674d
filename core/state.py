from dataclasses import dataclass, field, replace
from datetime import date
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

from exceptions.custom_errors import InvalidShiftError
from utils.constants import DEFAULT_SHIFTS, HOURS_DECIMALS
from utils.date_utils import parse_hour


@dataclass(frozen=True)
class Module:
    """A training module (MF) as delivered by the module feed."""

    id: str
    """Primary key of the module."""
    code: str
    """Module code, e.g. `MF1330_1` (`codigo`)."""
    hours_total: float
    """Declared duration in hours (`horasTotal`). Fixed once loaded."""
    title: str = ""
    """Optional module title (`titulo`)."""


@dataclass(frozen=True)
class Session:
    """One teaching day of a module."""

    module_id: str
    date: date
    hours: float


@dataclass(frozen=True)
class ShiftConfig:
    """
    Daily shift (turno) configuration.

    `hours_per_day` takes precedence over the start/end hours; `full_day`
    gives a 24h turn. The effective capacity is resolved once in
    `__post_init__` and rounded to `HOURS_DECIMALS`; a non-positive capacity
    is rejected there, so no engine can start a generation with it.
    """

    start_hour: Optional[Any] = None
    """Start of the shift (`horaInicio`), number or "HH:MM"."""
    end_hour: Optional[Any] = None
    """End of the shift (`horaFin`), number or "HH:MM"."""
    fixed_hours: Optional[float] = None
    """Fixed hours per day (`horasPorDia`)."""
    allow_weekends: bool = False
    """Allow sessions on Saturday and Sunday (`permitirFinde`)."""
    allow_holidays: bool = False
    """Allow sessions on excluded holiday dates (`permitirFestivos`)."""
    full_day: bool = False
    """24h turn (`esTurno24h`)."""
    turno: Optional[str] = None
    """Optional preset label (`manana`, `tarde`, `completo`)."""

    hours_per_day: float = field(init=False)

    def __post_init__(self):
        if self.full_day:
            hours = 24.0
        elif self.fixed_hours is not None:
            hours = float(self.fixed_hours)
        elif self.start_hour is not None and self.end_hour is not None:
            try:
                hours = parse_hour(self.end_hour) - parse_hour(self.start_hour)
            except ValueError as e:
                raise InvalidShiftError(f"Invalid shift hours: {e}")
        else:
            raise InvalidShiftError(
                "Shift needs either fixed hours per day or a start and end hour."
            )

        hours = round(hours, HOURS_DECIMALS)
        if hours <= 0:
            raise InvalidShiftError(
                f"Hours per day must be positive, got {hours:g} "
                f"(start={self.start_hour!r}, end={self.end_hour!r}, fixed={self.fixed_hours!r})."
            )
        object.__setattr__(self, "hours_per_day", hours)

    @classmethod
    def preset(
        cls,
        turno: str,
        allow_weekends: bool = False,
        allow_holidays: bool = False,
    ) -> "ShiftConfig":
        """Build one of the named turns declared in config/constants.json."""
        if turno not in DEFAULT_SHIFTS:
            raise InvalidShiftError(
                f"Unknown turno {turno!r}. Expected one of: {', '.join(DEFAULT_SHIFTS)}"
            )
        cfg = DEFAULT_SHIFTS[turno]
        return cls(
            start_hour=cfg["horaInicio"],
            end_hour=cfg["horaFin"],
            fixed_hours=cfg["horasPorDia"],
            allow_weekends=allow_weekends,
            allow_holidays=allow_holidays,
            turno=turno,
        )


@dataclass(frozen=True)
class ModuleSchedule:
    """A module plus its sessions in chronological order (ModuloConSesiones)."""

    module: Module
    sessions: Tuple[Session, ...] = ()

    @property
    def id(self) -> str:
        return self.module.id

    @property
    def code(self) -> str:
        return self.module.code

    @property
    def hours_total(self) -> float:
        return self.module.hours_total

    @property
    def hours_assigned(self) -> float:
        return sum(s.hours for s in self.sessions)

    @property
    def start(self) -> Optional[date]:
        return self.sessions[0].date if self.sessions else None

    @property
    def end(self) -> Optional[date]:
        return self.sessions[-1].date if self.sessions else None

    @property
    def dates(self) -> Tuple[date, ...]:
        return tuple(s.date for s in self.sessions)

    def with_sessions(self, sessions) -> "ModuleSchedule":
        return replace(self, sessions=tuple(sessions))


# Ordered list of scheduled modules for one certificate.
Plan = List[ModuleSchedule]


@dataclass(frozen=True)
class RegionSelection:
    """Region and year window used to resolve the excluded holiday dates."""

    region: str
    subregion: Optional[str] = None
    year_range: Optional[Tuple[int, int]] = None
    """Inclusive civil years. Defaults to the academic window of the plan start."""
    extra_dates: FrozenSet[date] = frozenset()
    """Custom holidays added on top of the regional calendar (`festivosPersonalizados`)."""


def plan_index(plan: Plan) -> Dict[str, int]:
    """Module id -> position in the plan."""
    return {ms.id: i for i, ms in enumerate(plan)}
