import secrets
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse
from starlette.middleware.trustedhost import TrustedHostMiddleware

from api.calendar import router as calendar_router
from api.healthcheck import router as healthcheck_router
from api.plan import router as plan_router
from config import settings
from utils.logger import logger

API_KEY_HEADER = "x-api-key"
HEALTH_PATH = "/api/health/check"

# Paths served without the API key
PUBLIC_EXACT = {"/openapi.json", "/redoc", "/docs", HEALTH_PATH}
PUBLIC_PREFIXES = ("/docs/", HEALTH_PATH)

app = FastAPI(
    title="Course Calendar Planner",
    description="Sequential course calendars over regional holiday calendars.",
)

# middlewares
if settings.ENABLE_CORS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ALLOW_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.ALLOWED_HOSTS)


def is_public(path: str) -> bool:
    return path in PUBLIC_EXACT or path.startswith(PUBLIC_PREFIXES)


# request timing, one line per planner call
@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    if request.url.path.startswith("/api/") and not is_public(request.url.path):
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.0f} ms)"
        )
    return response


# reject oversized plan snapshots before parsing them
@app.middleware("http")
async def limit_body_size(request: Request, call_next):
    limit = settings.MAX_BODY_BYTES
    if limit > 0:
        length = request.headers.get("content-length")
        if length and length.isdigit() and int(length) > limit:
            return JSONResponse(status_code=413, content={"detail": "Payload too large"})
    return await call_next(request)


@app.middleware("http")
async def api_key_guard(request: Request, call_next):
    if request.method == "OPTIONS" or is_public(request.url.path):
        return await call_next(request)

    expected = settings.API_KEY
    if not expected:
        logger.warning("API_KEY not set; API key auth is DISABLED (dev mode).")
        return await call_next(request)

    provided = request.headers.get(API_KEY_HEADER)
    if not provided or not secrets.compare_digest(str(provided), str(expected)):
        return JSONResponse(status_code=401, content={"detail": "Unauthorized"})

    return await call_next(request)


def custom_openapi():
    """OpenAPI schema with the API key scheme applied to every non-public path."""
    if app.openapi_schema:
        return app.openapi_schema

    schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
    )
    schema.setdefault("components", {}).setdefault("securitySchemes", {})["ApiKeyAuth"] = {
        "type": "apiKey",
        "in": "header",
        "name": API_KEY_HEADER,
        "description": "Enter your API key",
    }

    for path, methods in schema.get("paths", {}).items():
        for op in methods.values():
            op["security"] = [] if is_public(path) else [{"ApiKeyAuth": []}]

    app.openapi_schema = schema
    return app.openapi_schema


app.openapi = custom_openapi

# Register routers
app.include_router(plan_router, prefix="/api")
app.include_router(calendar_router, prefix="/api")
app.include_router(healthcheck_router, prefix="/api")
