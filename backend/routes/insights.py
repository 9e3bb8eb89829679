# =============================================================================
# HEALTH MONITOR BACKEND - INSIGHT ROUTES
# =============================================================================
"""
API routes for the dashboard extras: daily tip and local air quality.
"""

import logging

from fastapi import APIRouter, HTTPException, Query

from services.air_quality_client import AirQualityClient
from services.recommendations import daily_tip

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/daily-tip")
async def get_daily_tip():
    """Tip of the day."""
    return {"tip": daily_tip()}


@router.get("/air-quality")
async def get_air_quality(
    lat: float = Query(..., ge=-90, le=90),
    lon: float = Query(..., ge=-180, le=180)
):
    """Proxy the current air pollution reading for a location."""
    client = AirQualityClient()
    data, error = await client.get_air_quality(lat, lon)

    if error:
        logger.error(f"Error fetching air quality: {error}")
        raise HTTPException(status_code=502, detail="Failed to fetch air quality data")

    return data
