# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Portfolio Builder API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.dependencies import build_media_registry
from app.exceptions import PortfolioException, portfolio_exception_handler
from app.routers import (
    clients,
    health,
    media,
    offerings,
    organizations,
    portfolio,
    projects,
    reviews,
    upload,
)

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: create the per-user draft media registry
    - Shutdown: drop every draft still held in memory
    """
    logger.info(f"Starting Portfolio Builder API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")
    logger.info(f"Upload gateway: {settings.UPLOAD_GATEWAY_URL}")

    app.state.media_sessions = build_media_registry()

    yield

    registry = app.state.media_sessions
    logger.info(
        f"Shutting down Portfolio Builder API "
        f"({len(registry)} media sessions, {registry.draft_count} drafts released)"
    )
    registry.clear()


# Create FastAPI application
app = FastAPI(
    title="Portfolio Builder API",
    description="""
## Multi-tenant Portfolio Builder API

Build and publish portfolio pages for your organization: projects, services,
clients and reviews, each with their own images.

### Media Workflow

1. **Select a file** - `POST /api/v1/media/drafts` keeps it in memory and
   returns a `blob:` reference
2. **Put the reference in a form** - any image field accepts a `blob:`
   reference, an existing storage URL, or an empty string
3. **Save** - on create/update every `blob:` reference is uploaded through
   the upload gateway and replaced by its public URL before the record is
   written. URLs already stored are kept as-is

If any upload fails, nothing is saved and the drafts stay available so the
form can be resubmitted.
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Upload", "description": "Upload gateway backed by Supabase Storage"},
        {"name": "Media", "description": "Draft media selected but not yet saved"},
        {"name": "Organizations", "description": "Create, edit and publish organizations"},
        {"name": "Projects", "description": "Organization projects"},
        {"name": "Services", "description": "Services offered by an organization"},
        {"name": "Clients", "description": "Organization clients"},
        {"name": "Reviews", "description": "Client reviews"},
        {"name": "Portfolio", "description": "Public portfolio pages"},
        {"name": "Health", "description": "API health and readiness checks"},
    ],
)


# =============================================================================
# Middleware
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(PortfolioException)
async def handle_portfolio_exception(request: Request, exc: PortfolioException):
    """Handle custom portfolio exceptions."""
    return await portfolio_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

app.include_router(health.router, prefix="/api/v1", tags=["Health"])

# Upload gateway (POST /api/v1/upload?filename=...)
app.include_router(upload.router, prefix="/api/v1", tags=["Upload"])

app.include_router(media.router, prefix="/api/v1/media", tags=["Media"])

app.include_router(organizations.router, prefix="/api/v1/organizations", tags=["Organizations"])

# Child records: /organizations/{id}/<kind> and /<kind>/{id}
app.include_router(projects.router, prefix="/api/v1", tags=["Projects"])
app.include_router(offerings.router, prefix="/api/v1", tags=["Services"])
app.include_router(clients.router, prefix="/api/v1", tags=["Clients"])
app.include_router(reviews.router, prefix="/api/v1", tags=["Reviews"])

app.include_router(portfolio.router, prefix="/api/v1/portfolio", tags=["Portfolio"])


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Portfolio Builder API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/v1/health",
    }
