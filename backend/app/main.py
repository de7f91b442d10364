"""FastAPI application."""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .domain_errors import DomainError
from .problem_details import build_problem_details_response, build_unexpected_error_response
from .routers import reports

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)

# Create app
app = FastAPI(
    title="Production Status Reports",
    version="1.0.0",
    description="Read-only production status and report aggregation API"
)

if settings.ENV.lower() == "production" and any(origin.strip() == "*" for origin in settings.cors_origins):
    raise RuntimeError("ALLOWED_ORIGINS must be explicit in production (no wildcard).")

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["*"],
)


@app.exception_handler(DomainError)
async def handle_domain_error(_: Request, exc: DomainError):
    return build_problem_details_response(exc)


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception("Report request failed: %s %s", request.method, request.url.path)
    return build_unexpected_error_response(exc)


# Include routers
app.include_router(reports.router, prefix="/api/v1")


@app.get("/api/v1/system/health")
def health_check():
    """Health check endpoint."""
    return {
        "status": "ok",
        "version": "1.0.0",
        "terminal_process_id": settings.TERMINAL_PROCESS_ID,
    }


@app.get("/")
def root():
    """Root endpoint."""
    return {
        "message": "Production Status Reports API",
        "version": "1.0.0",
        "docs": "/docs"
    }
