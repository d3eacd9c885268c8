# jeevanpath/main.py
"""
FastAPI application entry point.
Includes security middleware, global error handlers, and all routers.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware
from jeevanpath.routers import emergency, resources, contact_forms, users, health
from jeevanpath.database import create_tables
from jeevanpath.config import settings
from jeevanpath.utils.errors import JeevanPathError
from jeevanpath.utils.logger import get_logger
import time
import asyncio

logger = get_logger(__name__)

app = FastAPI(
    title="JeevanPath API",
    description="Healthcare resource locator and emergency alert dispatch.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── CORS (mobile app + admin dashboard) ──────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── API Key Middleware ───────────────────────────────────────────────────────
class APIKeyMiddleware(BaseHTTPMiddleware):
    """
    Optional lightweight API key auth.
    Set API_KEY in .env. Leave empty to disable auth.
    """
    async def dispatch(self, request: Request, call_next):
        open_paths = {"/api/v1/health", "/docs", "/redoc", "/openapi.json"}
        if request.url.path in open_paths or not settings.API_KEY:
            return await call_next(request)

        api_key = request.headers.get("X-API-Key") or request.query_params.get("api_key")
        if api_key != settings.API_KEY:
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"success": False, "error": "Invalid or missing API key", "kind": "unauthorized"},
            )
        return await call_next(request)


if settings.API_KEY:
    app.add_middleware(APIKeyMiddleware)


# ── Request Timing Middleware ────────────────────────────────────────────────
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    duration = round((time.time() - start) * 1000, 2)
    logger.debug(f"{request.method} {request.url.path} → {response.status_code} ({duration}ms)")
    return response


# ── Exception Handlers ───────────────────────────────────────────────────────
@app.exception_handler(JeevanPathError)
async def domain_exception_handler(request: Request, exc: JeevanPathError):
    if exc.status_code >= 500:
        logger.error(f"{exc.kind} on {request.url.path}: {exc.message}", exc_info=exc.original_error)
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.message, "kind": exc.kind},
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"field": ".".join(str(p) for p in err["loc"] if p != "body"), "message": err["msg"]}
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"success": False, "error": "Validation failed", "kind": "validation_error", "errors": errors},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"success": False, "error": "Internal server error", "kind": "internal_error"},
    )


# ── Routers ──────────────────────────────────────────────────────────────────
app.include_router(emergency.router, prefix="/api/v1", tags=["🚨 Emergency"])
app.include_router(resources.router, prefix="/api/v1", tags=["🏥 Resources"])
app.include_router(contact_forms.router, prefix="/api/v1", tags=["📝 Contact Forms"])
app.include_router(users.router,     prefix="/api/v1", tags=["👤 Users"])
app.include_router(health.router,    prefix="/api/v1", tags=["💚 Health"])


# ── Startup ───────────────────────────────────────────────────────────────────
_background_tasks: set = set()


@app.on_event("startup")
async def startup():
    logger.info("🚀 JeevanPath Backend starting up...")
    create_tables()
    logger.info("✅ Database tables ready")
    logger.info(f"🚨 Provider search: {settings.PRIMARY_RADIUS_METERS}m, "
                f"escalating to {settings.ESCALATION_RADIUS_METERS}m below "
                f"{settings.MIN_PROVIDERS_NOTIFIED} providers")
    logger.info(f"🌐 Listening on http://{settings.BACKEND_IP}:{settings.BACKEND_PORT}")
    logger.info("📖 API docs at /docs")

    from jeevanpath.services.expiry_sweeper import run_expiry_sweeper
    task = asyncio.create_task(run_expiry_sweeper())
    _background_tasks.add(task)
    task.add_done_callback(_background_tasks.discard)


@app.on_event("shutdown")
async def shutdown():
    logger.info("🛑 JeevanPath Backend shutting down...")
    for task in list(_background_tasks):
        task.cancel()
