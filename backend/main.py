# =============================================================================
# HEALTH MONITOR BACKEND - FASTAPI APPLICATION
# =============================================================================
"""
Main FastAPI application for the AI Health Monitor API.
Serves face-scan health reports, history, badges and dashboard extras.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import get_settings
from database.connection import init_database, close_database
from database.encryption import verify_key_strength
from routes import insights, reports, users

# Configure logging
settings = get_settings()
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.
    Handles startup/shutdown of the database connection.
    """
    logger.info("Starting AI Health Monitor backend...")

    await init_database()
    logger.info("✓ Database initialized")

    if not verify_key_strength():
        logger.warning("ENCRYPTION_KEY is weak or default; set a 32+ character key in production")

    logger.info(f"✓ Badge history window: {settings.badge_history_window} reports")

    yield

    logger.info("Shutting down AI Health Monitor backend...")
    await close_database()
    logger.info("✓ Shutdown complete")


app = FastAPI(
    title="AI Health Monitor API",
    description="Face-scan wellness reports, trends and achievement badges",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(users.router, prefix="/api", tags=["Users"])
app.include_router(reports.router, prefix="/api", tags=["Health Reports"])
app.include_router(insights.router, prefix="/api", tags=["Insights"])


@app.get("/health")
async def health_check():
    """
    Health check endpoint for container orchestration.
    Returns service status and configuration info.
    """
    return {
        "status": "ok",
        "service": "health-monitor-backend",
        "badge_history_window": settings.badge_history_window
    }


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "message": "AI Health Monitor API",
        "docs": "/docs",
        "health": "/health"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
