from pydantic import BaseModel, model_validator, Field, ConfigDict
from typing import List, Optional, Union
from datetime import date
import datetime as dt
from utils.constants import DEFAULT_REGION, DEFAULT_SHIFT, DEFAULT_SHIFTS, DEFAULT_SUBREGION


# Define data models
class ModuleFeedItem(BaseModel):
    model_config = ConfigDict(extra="allow")

    id: str
    codigo: str
    horasTotal: float = Field(ge=0)
    titulo: str = ""


class ShiftSettings(BaseModel):
    model_config = ConfigDict(extra="allow")

    turno: Optional[str] = None
    horaInicio: Optional[Union[str, float]] = None
    horaFin: Optional[Union[str, float]] = None
    horasPorDia: Optional[float] = None
    permitirFinde: bool = False
    permitirFestivos: bool = False
    esTurno24h: bool = False

    @model_validator(mode="after")
    def fill_from_turno(self) -> "ShiftSettings":
        """
        Fill missing hours from the named turno preset.

        Explicit `horasPorDia` or `horaInicio`/`horaFin` always win over the
        preset; with nothing given at all, the default turno applies.
        """
        has_hours = self.horasPorDia is not None or (
            self.horaInicio is not None and self.horaFin is not None
        )
        if has_hours or self.esTurno24h:
            return self

        turno = self.turno or DEFAULT_SHIFT
        if turno not in DEFAULT_SHIFTS:
            raise ValueError(
                f"Unknown turno {turno!r}. Expected one of: {', '.join(DEFAULT_SHIFTS)}"
            )
        preset = DEFAULT_SHIFTS[turno]
        self.turno = turno
        self.horaInicio = preset["horaInicio"]
        self.horaFin = preset["horaFin"]
        self.horasPorDia = preset["horasPorDia"]
        return self


class RegionSettings(BaseModel):
    model_config = ConfigDict(extra="allow")

    region: str = Field(default=DEFAULT_REGION)
    subregion: Optional[str] = None
    startYear: Optional[int] = None
    endYear: Optional[int] = None
    festivosPersonalizados: List[date] = Field(default_factory=list)

    @model_validator(mode="after")
    def check_year_bounds(self) -> "RegionSettings":
        # the default region comes with its default island
        if self.region == DEFAULT_REGION and self.subregion is None:
            self.subregion = DEFAULT_SUBREGION
        if (self.startYear is None) != (self.endYear is None):
            raise ValueError("startYear and endYear must be given together.")
        return self


class SessionItem(BaseModel):
    moduloId: str
    fecha: date
    horas: float


class ScheduledModule(ModuleFeedItem):
    sesiones: List[SessionItem] = Field(default_factory=list)


class GeneratePlanRequest(BaseModel):
    modules: List[ModuleFeedItem]
    startDate: date
    shift: ShiftSettings = Field(default_factory=ShiftSettings)
    region: RegionSettings = Field(default_factory=RegionSettings)


class MoveModuleRequest(BaseModel):
    plan: List[ScheduledModule]
    moduleId: str
    newStartDate: date
    shift: ShiftSettings = Field(default_factory=ShiftSettings)
    region: RegionSettings = Field(default_factory=RegionSettings)


class VerifyPlanRequest(BaseModel):
    plan: List[ScheduledModule]
    shift: ShiftSettings = Field(default_factory=ShiftSettings)
    region: RegionSettings = Field(default_factory=RegionSettings)


class MetricsRequest(BaseModel):
    plan: List[ScheduledModule]


class IssueItem(BaseModel):
    ruleId: str
    severity: str
    message: str
    date: Optional[dt.date] = None
    moduleId: Optional[str] = None
    moduleCodes: List[str] = Field(default_factory=list)
