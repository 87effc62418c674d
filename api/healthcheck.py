from fastapi import APIRouter

from core.holidays import calendar_cache_size

router = APIRouter(prefix="/health", tags=["Health Check"])


@router.get("/check", summary="Health Check")
def healthcheck():
    return {"status": "ok", "calendarCacheEntries": calendar_cache_size()}
