"""
Main FastAPI application entry point for HackArena.

This is the core application file that:
- Initializes FastAPI with lifespan management
- Configures CORS for frontend integration
- Sets up Logfire observability
- Maps betting errors to JSON responses
- Provides health check endpoints
"""

from contextlib import asynccontextmanager
from typing import Dict

import logfire
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.routes import (
    admin_router,
    bets_router,
    hackathons_router,
    users_router,
)
from config import settings
from database import init_db, close_db, check_db_connection, get_db_info
from utils.errors import BettingError, format_api_error
from utils.logging import configure_logfire


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup and shutdown events.
    """
    # Initialize Logfire first so we can use structured logging
    configure_logfire(
        token=settings.logfire_token,
        environment=settings.environment,
        log_level=settings.log_level,
    )

    logfire.info(
        "Starting HackArena API Server",
        environment=settings.environment,
        debug=settings.debug,
    )

    await init_db(create_tables=settings.is_development)

    db_connected = await check_db_connection()
    db_info = get_db_info()
    if db_connected:
        logfire.info(
            "Database connection successful",
            url=db_info["url"],
            database=db_info["database"],
        )
    else:
        logfire.error(
            "Database connection failed",
            url=db_info["url"],
            database=db_info["database"],
        )

    logfire.info("HackArena API Server startup complete")

    yield

    # Shutdown
    logfire.info("Shutting down HackArena API Server")
    await close_db()


# Initialize FastAPI app
app = FastAPI(
    title="HackArena API",
    description="Backend API for HackArena - hackathon prediction markets",
    version="0.1.0",
    lifespan=lifespan,
    debug=settings.debug,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(BettingError)
async def betting_error_handler(request: Request, exc: BettingError) -> JSONResponse:
    """Expected service errors become 4xx responses with an error body."""
    return JSONResponse(
        status_code=exc.status_code,
        content=format_api_error(exc),
    )


# ============================================================================
# Health Check Endpoints
# ============================================================================

@app.get("/health", tags=["Health"])
async def health_check() -> Dict[str, str]:
    """
    Health check endpoint for load balancers and monitoring.

    Returns:
        dict: Health status of the application and database
    """
    db_connected = await check_db_connection()

    return {
        "status": "healthy" if db_connected else "degraded",
        "service": "hackarena-api",
        "version": "0.1.0",
        "database": "connected" if db_connected else "disconnected",
        "environment": settings.environment,
    }


@app.get("/", tags=["Root"])
async def root() -> Dict[str, str]:
    """
    Root endpoint - API information.

    Returns:
        dict: Basic API information
    """
    return {
        "name": "HackArena API",
        "version": "0.1.0",
        "description": "Backend API for hackathon prediction markets",
        "docs": "/docs",
        "health": "/health",
    }


# ============================================================================
# API Routers
# ============================================================================

app.include_router(admin_router)
app.include_router(bets_router)
app.include_router(hackathons_router)
app.include_router(users_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development,
        log_level=settings.log_level.lower(),
    )
