import logging
import random
from datetime import datetime
from typing import Optional

import aiosqlite

from database.models import HealthReportCreate, ReportCreated, ScanRequest
from services.gamification import GamificationService
from services.health_metrics import MetricsGenerator, normalize_confidence, normalize_mood
from services.report_store import ReportStore

logger = logging.getLogger(__name__)


class WellnessService:
    """
    Orchestrates the report creation flow:
    1. Builds metrics (generated from a scan, or taken from a client payload)
    2. Persists the report
    3. Evaluates badges against the updated history
    """

    def __init__(
        self,
        db: aiosqlite.Connection,
        rng: Optional[random.Random] = None,
        history_window: int = 30
    ):
        self.store = ReportStore(db)
        self.generator = MetricsGenerator(rng=rng)
        self.gamification = GamificationService(self.store, history_window=history_window)

    async def create_report_from_scan(
        self,
        user_id: int,
        scan: ScanRequest,
        created_at: Optional[datetime] = None
    ) -> ReportCreated:
        """Generate metrics for a completed scan and store them as a report."""
        mood = normalize_mood(scan.mood)
        metrics = self.generator.generate(mood)

        report = await self.store.create_health_report(
            user_id=user_id,
            detected_mood=mood,
            mood_confidence=normalize_confidence(scan.confidence),
            face_image_data=scan.face_image,
            scan_duration=scan.scan_duration,
            created_at=created_at,
            **metrics.to_dict()
        )
        return await self._finish(report)

    async def submit_report(
        self,
        user_id: int,
        payload: HealthReportCreate,
        created_at: Optional[datetime] = None
    ) -> ReportCreated:
        """Store a client-computed report."""
        report = await self.store.create_health_report(
            user_id=user_id,
            created_at=created_at,
            **payload.model_dump()
        )
        return await self._finish(report)

    async def _finish(self, report) -> ReportCreated:
        # Report is committed at this point, so the history includes it
        new_badges = await self.gamification.check_and_award_badges(report.user_id)

        logger.info(
            f"Report {report.id} completed for user {report.user_id}: "
            f"score={report.wellness_score}, mood={report.detected_mood}, "
            f"new_badges={len(new_badges)}"
        )

        return ReportCreated(report=report, new_badges=new_badges)
