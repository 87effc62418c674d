from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date


class HolidayItem(BaseModel):
    fecha: date
    nombre: str


class HolidayCalendar(BaseModel):
    region: str
    subregion: Optional[str] = None
    startYear: int
    endYear: int
    festivos: List[HolidayItem] = Field(default_factory=list)
