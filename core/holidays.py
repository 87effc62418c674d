"""
Regional holiday calendars (festivos).

The data is a finite table keyed by the `Region` and `Island` enums. Fixed
holidays are declared as (month, day, label) and expanded per civil year;
the moving Easter holidays are derived from the Gregorian computus.
Weekends are never part of the resolved set: weekend exclusion is a shift
policy applied by the generator.
"""
from datetime import date, timedelta
from enum import Enum
from functools import lru_cache
from typing import Dict, FrozenSet, Iterable, Optional, Tuple

from dateutil.easter import easter, EASTER_WESTERN

from exceptions.custom_errors import InvalidRegionError, InvalidYearRangeError
from utils.date_utils import normalise_dates


class Region(str, Enum):
    ANDALUCIA = "andalucia"
    ARAGON = "aragon"
    ASTURIAS = "asturias"
    BALEARES = "baleares"
    CANARIAS = "canarias"
    CANTABRIA = "cantabria"
    CASTILLA_LEON = "castilla_leon"
    CASTILLA_MANCHA = "castilla_mancha"
    CATALUNA = "cataluna"
    CEUTA = "ceuta"
    EXTREMADURA = "extremadura"
    GALICIA = "galicia"
    MADRID = "madrid"
    MELILLA = "melilla"
    MURCIA = "murcia"
    NAVARRA = "navarra"
    PAIS_VASCO = "pais_vasco"
    RIOJA = "rioja"
    VALENCIA = "valencia"


class Island(str, Enum):
    TENERIFE = "tenerife"
    GRAN_CANARIA = "gran_canaria"
    LANZAROTE = "lanzarote"
    FUERTEVENTURA = "fuerteventura"
    LA_PALMA = "la_palma"
    LA_GOMERA = "la_gomera"
    EL_HIERRO = "el_hierro"


FixedHoliday = Tuple[int, int, str]

NATIONAL_HOLIDAYS: Tuple[FixedHoliday, ...] = (
    (1, 1, "Año Nuevo"),
    (1, 6, "Reyes"),
    (5, 1, "Día del Trabajo"),
    (8, 15, "Asunción"),
    (10, 12, "Fiesta Nacional"),
    (11, 1, "Todos los Santos"),
    (12, 6, "Constitución"),
    (12, 8, "Inmaculada"),
    (12, 25, "Navidad"),
)

REGIONAL_HOLIDAYS: Dict[Region, Tuple[FixedHoliday, ...]] = {
    Region.ANDALUCIA: ((2, 28, "Día de Andalucía"),),
    Region.ARAGON: ((4, 23, "San Jorge"),),
    Region.ASTURIAS: ((9, 8, "Día de Asturias"),),
    Region.BALEARES: ((3, 1, "Día de las Illes Balears"),),
    Region.CANARIAS: ((2, 2, "Candelaria"), (5, 30, "Día de Canarias")),
    Region.CANTABRIA: ((7, 28, "Día de las Instituciones"),),
    Region.CASTILLA_LEON: ((4, 23, "Día de Castilla y León"),),
    Region.CASTILLA_MANCHA: ((5, 31, "Día de Castilla-La Mancha"),),
    Region.CATALUNA: ((6, 24, "Sant Joan"), (9, 11, "Diada")),
    Region.CEUTA: ((9, 2, "Día de Ceuta"),),
    Region.EXTREMADURA: ((9, 8, "Día de Extremadura"),),
    Region.GALICIA: ((7, 25, "Santiago Apóstol"),),
    Region.MADRID: ((5, 2, "Dos de Mayo"),),
    Region.MELILLA: ((9, 17, "Día de Melilla"),),
    Region.MURCIA: ((6, 9, "Día de la Región de Murcia"),),
    Region.NAVARRA: ((12, 3, "San Francisco Javier"),),
    Region.PAIS_VASCO: ((10, 25, "Día de Euskadi"),),
    Region.RIOJA: ((6, 9, "Día de La Rioja"),),
    Region.VALENCIA: ((10, 9, "Día de la Comunitat Valenciana"),),
}

# Second-level calendars. Only regions listed here accept (and require) a subregion.
SUBREGION_HOLIDAYS: Dict[Region, Dict[str, Tuple[FixedHoliday, ...]]] = {
    Region.CANARIAS: {
        Island.TENERIFE.value: ((2, 2, "Virgen de Candelaria"),),
        Island.GRAN_CANARIA.value: ((4, 29, "San Pedro Mártir"),),
        Island.LANZAROTE.value: ((9, 15, "Virgen de los Dolores"),),
        Island.FUERTEVENTURA.value: ((9, 15, "Virgen de la Peña"),),
        Island.LA_PALMA.value: ((8, 5, "Virgen de las Nieves"),),
        Island.LA_GOMERA.value: ((10, 1, "Virgen de Guadalupe"),),
        Island.EL_HIERRO.value: ((9, 24, "Virgen de los Reyes"),),
    },
}


def parse_region(region) -> Region:
    if isinstance(region, Region):
        return region
    try:
        return Region(str(region).strip().lower())
    except ValueError:
        raise InvalidRegionError(
            f"Unknown region {region!r}. Expected one of: {', '.join(r.value for r in Region)}"
        )


def parse_subregion(region: Region, subregion: Optional[str]) -> Optional[str]:
    """Validate the subregion against the region's second-level table."""
    table = SUBREGION_HOLIDAYS.get(region)
    if table is None:
        if subregion:
            raise InvalidRegionError(
                f"Region {region.value!r} has no subregions, got {subregion!r}."
            )
        return None

    if not subregion:
        raise InvalidRegionError(
            f"Region {region.value!r} requires a subregion: {', '.join(table)}"
        )
    key = str(subregion).strip().lower()
    if key not in table:
        raise InvalidRegionError(
            f"Unknown subregion {subregion!r} for {region.value!r}. Expected one of: {', '.join(table)}"
        )
    return key


def easter_holidays(year: int) -> Dict[date, str]:
    """Holy Thursday and Good Friday (Semana Santa)."""
    sunday = easter(year, EASTER_WESTERN)
    return {
        sunday - timedelta(days=3): "Jueves Santo",
        sunday - timedelta(days=2): "Viernes Santo",
    }


def _expand(year: int, holidays: Iterable[FixedHoliday]) -> Dict[date, str]:
    return {date(year, month, day): label for month, day, label in holidays}


@lru_cache(maxsize=256)
def _year_holidays(region: Region, subregion: Optional[str], year: int) -> Tuple[Tuple[date, str], ...]:
    labelled: Dict[date, str] = {}
    labelled.update(_expand(year, NATIONAL_HOLIDAYS))
    labelled.update(easter_holidays(year))
    labelled.update(_expand(year, REGIONAL_HOLIDAYS.get(region, ())))
    if subregion is not None:
        labelled.update(_expand(year, SUBREGION_HOLIDAYS[region][subregion]))
    return tuple(sorted(labelled.items()))


def holidays_for_year(region, subregion: Optional[str], year: int) -> Dict[date, str]:
    """
    Labelled holidays of one civil year for a region (and island when applicable).

    Raises:
        InvalidRegionError: unknown region, or missing/unknown/unexpected subregion.
    """
    reg = parse_region(region)
    sub = parse_subregion(reg, subregion)
    return dict(_year_holidays(reg, sub, int(year)))


def academic_year_range(year: int) -> Tuple[int, int]:
    """A course year starting in September spans `year` and `year + 1`."""
    return (year, year + 1)


def resolve_excluded(
    region,
    subregion: Optional[str] = None,
    year_range: Tuple[int, int] = None,
    extra_dates: Iterable = (),
) -> FrozenSet[date]:
    """
    Resolve the excluded (holiday) dates for a region over an inclusive year range.

    Args:
        region: One of the `Region` codes.
        subregion: Island code, required for Canarias and rejected elsewhere.
        year_range: (start_year, end_year), inclusive and ordered.
        extra_dates: Custom holidays added to the result.

    Returns:
        frozenset of `datetime.date`. Weekends are not included.
    """
    if year_range is None:
        raise InvalidYearRangeError("A year range is required to resolve holidays.")
    start_year, end_year = (int(y) for y in year_range)
    if start_year > end_year:
        raise InvalidYearRangeError(
            f"Year range must be chronologically ordered, got {start_year} > {end_year}."
        )

    reg = parse_region(region)
    sub = parse_subregion(reg, subregion)

    excluded = set()
    for year in range(start_year, end_year + 1):
        excluded.update(d for d, _ in _year_holidays(reg, sub, year))
    excluded.update(normalise_dates(extra_dates))
    return frozenset(excluded)


def clear_calendar_cache() -> None:
    """Drop every memoised year calendar."""
    _year_holidays.cache_clear()


def calendar_cache_size() -> int:
    return _year_holidays.cache_info().currsize
