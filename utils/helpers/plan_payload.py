import pandas as pd
from typing import Any, Dict, List

from core.coherence_rules import Issue
from core.state import Module, ModuleSchedule, Plan, RegionSelection, Session, ShiftConfig
from planner.metrics import PlanMetrics
from schemas.plan.generate import (
    IssueItem,
    ModuleFeedItem,
    RegionSettings,
    ScheduledModule,
    ShiftSettings,
)
from utils.date_utils import normalise_dates
from utils.validate import validate_modules

SESSION_COLUMNS = ["moduloId", "codigo", "fecha", "horas"]


def to_module(item: ModuleFeedItem) -> Module:
    return Module(
        id=str(item.id).strip(),
        code=str(item.codigo).strip(),
        hours_total=item.horasTotal,
        title=item.titulo,
    )


def to_modules(items: List[ModuleFeedItem]) -> List[Module]:
    return [to_module(i) for i in items]


def to_shift(settings: ShiftSettings) -> ShiftConfig:
    """Build the engine shift; raises InvalidShiftError on non-positive hours/day."""
    return ShiftConfig(
        start_hour=settings.horaInicio,
        end_hour=settings.horaFin,
        fixed_hours=settings.horasPorDia,
        allow_weekends=settings.permitirFinde,
        allow_holidays=settings.permitirFestivos,
        full_day=settings.esTurno24h,
        turno=settings.turno,
    )


def to_selection(settings: RegionSettings) -> RegionSelection:
    year_range = None
    if settings.startYear is not None:
        year_range = (settings.startYear, settings.endYear)
    return RegionSelection(
        region=settings.region,
        subregion=settings.subregion,
        year_range=year_range,
        extra_dates=normalise_dates(settings.festivosPersonalizados),
    )


def to_plan(items: List[ScheduledModule]) -> Plan:
    """
    Rebuild a plan snapshot sent back by the client.

    Modules go through the same validation as the module feed; each module's
    sessions are sorted chronologically.
    """
    modules = validate_modules(to_module(item) for item in items)
    plan = []
    for module, item in zip(modules, items):
        sessions = sorted(
            (Session(module_id=module.id, date=s.fecha, hours=s.horas) for s in item.sesiones),
            key=lambda s: s.date,
        )
        plan.append(ModuleSchedule(module=module, sessions=tuple(sessions)))
    return plan


def plan_to_payload(plan: Plan) -> List[Dict[str, Any]]:
    """Plan in the wire shape of `ScheduledModule`."""
    return [
        {
            "id": ms.id,
            "codigo": ms.code,
            "horasTotal": ms.hours_total,
            "titulo": ms.module.title,
            "sesiones": [
                {"moduloId": s.module_id, "fecha": s.date.isoformat(), "horas": s.hours}
                for s in ms.sessions
            ],
        }
        for ms in plan
    ]


def issues_to_payload(issues: List[Issue]) -> List[Dict[str, Any]]:
    return [
        IssueItem(
            ruleId=i.rule_id,
            severity=i.severity,
            message=i.message,
            date=i.date,
            moduleId=i.module_id,
            moduleCodes=list(i.module_codes),
        ).model_dump(mode="json")
        for i in issues
    ]


def metrics_to_payload(summary: PlanMetrics) -> Dict[str, Any]:
    def iso(d):
        return d.isoformat() if d is not None else None

    return {
        "spanStart": iso(summary.span_start),
        "spanEnd": iso(summary.span_end),
        "totalWorkingDays": summary.total_working_days,
        "hoursPerWeekAvg": summary.hours_per_week_avg,
        "perModuleRange": {
            module_id: (
                {"inicio": iso(rng[0]), "fin": iso(rng[1])} if rng is not None else None
            )
            for module_id, rng in summary.per_module_range.items()
        },
        "totalModules": summary.total_modules,
        "totalSessions": summary.total_sessions,
        "totalHours": summary.total_hours,
        "assignedHours": summary.assigned_hours,
        "remainingHours": summary.remaining_hours,
        "completionPct": summary.completion_pct,
    }


def sessions_frame(plan: Plan) -> pd.DataFrame:
    """One row per session, in plan order."""
    records = [
        {"moduloId": ms.id, "codigo": ms.code, "fecha": s.date, "horas": s.hours}
        for ms in plan
        for s in ms.sessions
    ]
    return pd.DataFrame(records, columns=SESSION_COLUMNS)


def calendar_grid(plan: Plan) -> pd.DataFrame:
    """
    Pivot the sessions into a date x module-code grid of hours, for calendar rendering.

    Module columns follow plan order; dates are sorted; empty cells are 0.
    """
    df = sessions_frame(plan)
    codes = list(dict.fromkeys(ms.code for ms in plan))
    if df.empty:
        return pd.DataFrame(columns=codes)
    grid = (
        df.pivot_table(index="fecha", columns="codigo", values="horas", aggfunc="sum", fill_value=0)
        .reindex(columns=codes, fill_value=0)
        .sort_index()
        .rename_axis(None, axis=1)
    )
    return grid


def summary_frame(plan: Plan) -> pd.DataFrame:
    """Per-module summary: declared vs assigned hours, first and last date, session count."""
    rows = [
        {
            "moduloId": ms.id,
            "codigo": ms.code,
            "horasTotal": ms.hours_total,
            "horasAsignadas": ms.hours_assigned,
            "sesiones": len(ms.sessions),
            "inicio": ms.start.isoformat() if ms.start else None,
            "fin": ms.end.isoformat() if ms.end else None,
        }
        for ms in plan
    ]
    return pd.DataFrame(
        rows,
        columns=["moduloId", "codigo", "horasTotal", "horasAsignadas", "sesiones", "inicio", "fin"],
    )
