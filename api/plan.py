from fastapi import APIRouter, HTTPException
import traceback

from docs.plan.generate import (
    generate_plan_description,
    move_module_description,
    plan_metrics_description,
    verify_plan_description,
)
from exceptions.custom_errors import CUSTOM_ERRORS, status_code_for
from planner.builder import (
    build_plan,
    excluded_for,
    plan_anchor,
    plan_end,
    with_covering_calendar,
)
from planner.cascade import move_module
from planner.metrics import metrics
from planner.verifier import is_coherent, verify
from schemas.plan.generate import (
    GeneratePlanRequest,
    MetricsRequest,
    MoveModuleRequest,
    VerifyPlanRequest,
)
from utils.helpers.plan_payload import (
    issues_to_payload,
    metrics_to_payload,
    plan_to_payload,
    sessions_frame,
    summary_frame,
    to_modules,
    to_plan,
    to_selection,
    to_shift,
)

router = APIRouter(prefix="/plan", tags=["Plan"])


# generate plan
@router.post(
    "/generate",
    response_model=dict,
    description=generate_plan_description,
    summary="Generate Plan",
)
async def generate_plan(request: GeneratePlanRequest):
    try:
        plan, issues, summary = build_plan(
            modules=to_modules(request.modules),
            start_date=request.startDate,
            shift=to_shift(request.shift),
            selection=to_selection(request.region),
        )

        sessions_df = sessions_frame(plan)
        sessions_df["fecha"] = sessions_df["fecha"].map(lambda d: d.isoformat())

        # ==== final response ====
        return {
            "plan": plan_to_payload(plan),
            "sessions": sessions_df.to_dict(orient="records"),
            "summary": summary_frame(plan).to_dict(orient="records"),
            "issues": issues_to_payload(issues),
            "coherent": is_coherent(issues),
            "metrics": metrics_to_payload(summary),
        }

    except tuple(CUSTOM_ERRORS) as e:
        raise HTTPException(status_code=status_code_for(e), detail=str(e))
    except Exception as e:
        tb = traceback.format_exc()
        raise HTTPException(status_code=500, detail=f"{str(e)}\n\nTraceback:\n{tb}")


# move module (cascade preview)
@router.post(
    "/move",
    response_model=dict,
    description=move_module_description,
    summary="Move Module",
)
async def move_plan_module(request: MoveModuleRequest):
    try:
        plan = to_plan(request.plan)
        shift = to_shift(request.shift)
        anchor = min(filter(None, [plan_anchor(plan), request.newStartDate]))

        result, excluded = with_covering_calendar(
            to_selection(request.region),
            anchor,
            lambda excl: move_module(plan, request.moduleId, request.newStartDate, shift, excl),
            plan_of=lambda res: res.plan,
        )
        issues = verify(result.plan, shift, excluded)

        return {
            "plan": plan_to_payload(result.plan),
            "affectedCount": result.affected_count,
            "issues": issues_to_payload(issues),
            "coherent": is_coherent(issues),
        }

    except tuple(CUSTOM_ERRORS) as e:
        raise HTTPException(status_code=status_code_for(e), detail=str(e))
    except Exception as e:
        tb = traceback.format_exc()
        raise HTTPException(status_code=500, detail=f"{str(e)}\n\nTraceback:\n{tb}")


@router.post(
    "/verify",
    response_model=dict,
    description=verify_plan_description,
    summary="Verify Plan",
)
async def verify_plan(request: VerifyPlanRequest):
    try:
        plan = to_plan(request.plan)
        shift = to_shift(request.shift)
        excluded = excluded_for(to_selection(request.region), plan_anchor(plan), plan_end(plan))
        issues = verify(plan, shift, excluded)
        return {"issues": issues_to_payload(issues), "coherent": is_coherent(issues)}

    except tuple(CUSTOM_ERRORS) as e:
        raise HTTPException(status_code=status_code_for(e), detail=str(e))
    except Exception as e:
        tb = traceback.format_exc()
        raise HTTPException(status_code=500, detail=f"{str(e)}\n\nTraceback:\n{tb}")


@router.post(
    "/metrics",
    response_model=dict,
    description=plan_metrics_description,
    summary="Plan Metrics",
)
async def plan_metrics(request: MetricsRequest):
    try:
        plan = to_plan(request.plan)
        return {
            "metrics": metrics_to_payload(metrics(plan)),
            "summary": summary_frame(plan).to_dict(orient="records"),
        }

    except tuple(CUSTOM_ERRORS) as e:
        raise HTTPException(status_code=status_code_for(e), detail=str(e))
    except Exception as e:
        tb = traceback.format_exc()
        raise HTTPException(status_code=500, detail=f"{str(e)}\n\nTraceback:\n{tb}")
