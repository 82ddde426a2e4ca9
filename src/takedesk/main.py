"""
Takedesk - Main Application.

FastAPI application: profiles, findings review, identity documents and the
admin back office, all over a Supabase client (in-memory in test mode).
"""

import logging
import sys
import traceback
from contextlib import asynccontextmanager
from uuid import UUID, uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from takedesk import __version__
from takedesk.config import get_settings
from takedesk.exceptions import TakedeskException
from takedesk.schemas import ErrorDetail, ErrorResponse, HealthResponse

# Import module routers
from takedesk.modules.admin import router as admin_router
from takedesk.modules.billing import router as billing_router
from takedesk.modules.findings import router as findings_router
from takedesk.modules.identity import router as identity_router
from takedesk.modules.testing import router as testing_router
from takedesk.modules.users import router as users_router

# Configure standard logging
logging.basicConfig(
    level=get_settings().app_log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger("takedesk")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    settings = get_settings()
    logger.info(
        f"Starting Takedesk API v{__version__} "
        f"[env={settings.app_env}] "
        f"[test_mode={settings.test_mode}]"
    )
    yield
    logger.info("Shutting down Takedesk API")


# Create FastAPI application
app = FastAPI(
    title="Takedesk API",
    description="Content takedown service: findings review, identity verification and admin console.",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Middleware
# =============================================================================


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log all requests."""
    request_id = getattr(request.state, "request_id", "unknown")
    logger.info(f"[{request_id}] {request.method} {request.url.path}")

    response = await call_next(request)

    logger.info(f"[{request_id}] {request.method} {request.url.path} -> {response.status_code}")

    return response


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Add request ID to all requests."""
    request_id = request.headers.get("X-Request-ID") or str(uuid4())
    request.state.request_id = request_id

    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id

    return response


# =============================================================================
# Exception Handlers
# =============================================================================


@app.exception_handler(TakedeskException)
async def takedesk_exception_handler(request: Request, exc: TakedeskException):
    """Handle Takedesk custom exceptions."""
    request_id_str = getattr(request.state, "request_id", None)
    request_id = None
    if request_id_str:
        try:
            request_id = UUID(request_id_str)
        except (ValueError, TypeError):
            pass

    logger.warning(f"TakedeskException: {exc.code} - {exc.message}")

    body = ErrorResponse(
        error=ErrorDetail(
            code=exc.code,
            message=exc.message,
            details=exc.details,
            request_id=request_id,
        )
    )
    return JSONResponse(status_code=exc.status_code, content=body.model_dump(mode="json"))


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    request_id_str = getattr(request.state, "request_id", None)

    logger.error(f"Unhandled exception on {request.url.path}")
    logger.error(f"Exception type: {type(exc).__name__}")
    logger.error(f"Exception message: {str(exc)}")
    logger.error(f"Traceback:\n{traceback.format_exc()}")

    return JSONResponse(
        status_code=500,
        content={
            "error": {
                "code": "INTERNAL_ERROR",
                "message": str(exc) if get_settings().app_debug else "An unexpected error occurred",
                "request_id": request_id_str,
            }
        },
    )


# =============================================================================
# Health Check
# =============================================================================


@app.get("/health", response_model=HealthResponse, tags=["health"])
async def health_check():
    """Health check endpoint."""
    settings = get_settings()
    return HealthResponse(
        status="healthy",
        version=__version__,
        app_env=settings.app_env,
        is_production=settings.is_production,
        test_mode=settings.test_mode,
    )


# =============================================================================
# Register Module Routers
# =============================================================================

app.include_router(users_router)
app.include_router(findings_router)
app.include_router(identity_router)
app.include_router(billing_router)
app.include_router(admin_router)
app.include_router(testing_router)
