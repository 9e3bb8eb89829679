# =============================================================================
# HEALTH MONITOR BACKEND - HEALTH REPORT ROUTES
# =============================================================================
"""
API routes for health report operations.
Handles scan submission, report history, trends and recommendations.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

import aiosqlite

from config import get_settings
from database.connection import get_db
from database.models import (
    HealthReport,
    HealthReportCreate,
    HealthReportDetail,
    HealthTrends,
    Recommendations,
    ReportCreated,
    ScanRequest,
    TrendPoint,
)
from services.recommendations import get_health_recommendations, get_wellness_level
from services.report_store import ReportStore
from services.wellness import WellnessService

logger = logging.getLogger(__name__)
router = APIRouter()

settings = get_settings()


async def _require_user(store: ReportStore, user_id: int) -> None:
    if not await store.user_exists(user_id):
        raise HTTPException(status_code=404, detail="User not found")


@router.post("/users/{user_id}/scans", response_model=ReportCreated, status_code=201)
async def submit_scan(
    user_id: int,
    scan: ScanRequest,
    db: aiosqlite.Connection = Depends(get_db)
):
    """
    Turn a completed face scan into a health report.

    1. Generates vitals from the detected mood
    2. Stores the report
    3. Awards any badges the updated history qualifies for
    """
    service = WellnessService(db, history_window=settings.badge_history_window)
    await _require_user(service.store, user_id)

    return await service.create_report_from_scan(user_id, scan)


@router.post("/users/{user_id}/health-reports", response_model=ReportCreated, status_code=201)
async def create_health_report(
    user_id: int,
    payload: HealthReportCreate,
    db: aiosqlite.Connection = Depends(get_db)
):
    """
    Store a report whose metrics were computed by the client.
    Out-of-range values are clamped rather than rejected.
    """
    service = WellnessService(db, history_window=settings.badge_history_window)
    await _require_user(service.store, user_id)

    return await service.submit_report(user_id, payload)


@router.get("/users/{user_id}/health-reports", response_model=list[HealthReport])
async def get_health_reports(
    user_id: int,
    limit: Optional[int] = Query(default=None, ge=1, le=100),
    db: aiosqlite.Connection = Depends(get_db)
):
    """Most recent reports for a user, newest first."""
    store = ReportStore(db)
    await _require_user(store, user_id)

    return await store.get_user_health_reports(
        user_id,
        limit=limit or settings.default_history_limit
    )


@router.get("/users/{user_id}/health-reports/latest", response_model=Optional[HealthReport])
async def get_latest_health_report(
    user_id: int,
    db: aiosqlite.Connection = Depends(get_db)
):
    """Latest report for a user, or null if none exist yet."""
    store = ReportStore(db)
    await _require_user(store, user_id)

    return await store.get_latest_health_report(user_id)


@router.get(
    "/users/{user_id}/health-reports/latest/recommendations",
    response_model=Recommendations
)
async def get_latest_recommendations(
    user_id: int,
    db: aiosqlite.Connection = Depends(get_db)
):
    """Recommendations based on the user's latest report."""
    store = ReportStore(db)
    await _require_user(store, user_id)

    latest = await store.get_latest_health_report(user_id)
    if latest is None:
        raise HTTPException(status_code=404, detail="No health reports yet")

    return Recommendations(
        report_id=latest.id,
        wellness_level=get_wellness_level(latest.wellness_score),
        recommendations=get_health_recommendations(latest)
    )


@router.get("/health-reports/{report_id}", response_model=HealthReportDetail)
async def get_health_report(
    report_id: int,
    db: aiosqlite.Connection = Depends(get_db)
):
    """Retrieve a specific report by ID, including its face snapshot."""
    report = await ReportStore(db).get_health_report(report_id)

    if not report:
        raise HTTPException(status_code=404, detail="Health report not found")

    return report


@router.get("/users/{user_id}/trends", response_model=HealthTrends)
async def get_health_trends(
    user_id: int,
    days: int = Query(default=7, ge=1, le=90),
    db: aiosqlite.Connection = Depends(get_db)
):
    """
    Chronological series of the reports created in the last `days` days,
    oldest first, with averages for the charted metrics.
    """
    store = ReportStore(db)
    await _require_user(store, user_id)

    since = datetime.now() - timedelta(days=days)
    reports = await store.get_user_health_reports_since(user_id, since)

    points = [
        TrendPoint(
            report_id=report.id,
            created_at=report.created_at,
            wellness_score=report.wellness_score,
            heart_rate=report.heart_rate,
            oxygen_level=report.oxygen_level,
            blood_sugar=report.blood_sugar
        )
        for report in reports
    ]

    if not points:
        return HealthTrends(user_id=user_id, points=[])

    count = len(points)
    return HealthTrends(
        user_id=user_id,
        points=points,
        average_wellness_score=round(sum(p.wellness_score for p in points) / count, 1),
        average_heart_rate=round(sum(p.heart_rate for p in points) / count, 1),
        average_oxygen_level=round(sum(p.oxygen_level for p in points) / count, 1)
    )
