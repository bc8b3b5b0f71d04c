"""HealFit Zone API - Main Application."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from healfit.config import get_settings
from healfit.models.base import init_db
from healfit.routes import (
    auth_router,
    profile_router,
    plan_router,
    workout_router,
    trainer_router,
    admin_router,
    entry_router,
    measurement_router,
    tools_router,
)
from healfit.services.field_encryption import get_field_encryption

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    logger.info("Starting HealFit Zone API...")
    get_field_encryption()  # Fail fast on a missing or malformed key
    if settings.db_auto_init:
        await init_db()
        logger.info("Database initialized")
    yield
    # Shutdown
    logger.info("Shutting down HealFit Zone API...")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="""
    HealFit Zone API - Gym platform backend.

    ## Features
    - Member, expert and admin profiles with onboarding
    - Password login and OTP verification
    - Diet/workout/physio plans per plan cycle with expert notes
    - Workout library and trainer assignments
    - Gym clock in/out and attendance
    - Body measurements
    - BMR, body fat and macro calculators

    ## Authentication
    Most endpoints require a JWT token in the Authorization header:
    `Authorization: Bearer <token>`
    """,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    """Unique or foreign key violations."""
    logger.warning(f"Integrity error on {request.url.path}: {exc.orig}")
    return JSONResponse(
        status_code=409,
        content={"detail": "Conflicting record"},
    )


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    """Any other store failure."""
    logger.error(f"Database error on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Database error"},
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle uncaught exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


# Include routers
app.include_router(auth_router)
app.include_router(profile_router)
app.include_router(plan_router)
app.include_router(workout_router)
app.include_router(trainer_router)
app.include_router(admin_router)
app.include_router(entry_router)
app.include_router(measurement_router)
app.include_router(tools_router)


# Health check endpoint
@app.get("/health", tags=["Health"])
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "version": settings.app_version,
    }


@app.get("/", tags=["Root"])
async def root():
    """Root endpoint with API info."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
        "health": "/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "healfit.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
