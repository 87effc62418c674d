from typing import Optional
from fastapi import APIRouter, HTTPException, Query

from core.holidays import holidays_for_year, parse_region, parse_subregion
from docs.calendar.holidays import holidays_description
from exceptions.custom_errors import (
    CUSTOM_ERRORS,
    InvalidYearRangeError,
    status_code_for,
)
from schemas.calendar.holidays import HolidayCalendar, HolidayItem

router = APIRouter(prefix="/calendar", tags=["Calendar"])


@router.get(
    "/holidays",
    response_model=HolidayCalendar,
    description=holidays_description,
    summary="Regional Holidays",
)
def list_holidays(
    region: str,
    startYear: int,
    endYear: int,
    subregion: Optional[str] = Query(default=None),
):
    try:
        if startYear > endYear:
            raise InvalidYearRangeError(
                f"Year range must be chronologically ordered, got {startYear} > {endYear}."
            )
        reg = parse_region(region)
        sub = parse_subregion(reg, subregion)

        festivos = []
        for year in range(startYear, endYear + 1):
            for day, label in sorted(holidays_for_year(reg, sub, year).items()):
                festivos.append(HolidayItem(fecha=day, nombre=label))

        return HolidayCalendar(
            region=reg.value,
            subregion=sub,
            startYear=startYear,
            endYear=endYear,
            festivos=festivos,
        )

    except tuple(CUSTOM_ERRORS) as e:
        raise HTTPException(status_code=status_code_for(e), detail=str(e))
