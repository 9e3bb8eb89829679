# =============================================================================
# HEALTH MONITOR BACKEND - REPORT STORE
# =============================================================================
"""
Persistence for health reports and badges on top of aiosqlite.
Reports are write-once; history is always returned newest first.
"""

import logging
from datetime import date, datetime
from typing import Any, Optional

import aiosqlite

from database.encryption import encrypt_face_image, decrypt_face_image
from database.models import Badge, HealthReport, HealthReportDetail
from services.health_metrics import (
    clamp_metric,
    normalize_energy_level,
    normalize_mood,
    normalize_stress_level,
)

logger = logging.getLogger(__name__)

REPORT_COLUMNS = """id, user_id, wellness_score, heart_rate, oxygen_level, blood_sugar,
                    stress_level, energy_level, detected_mood, mood_confidence,
                    scan_duration, created_at"""


def _parse_timestamp(value: Any) -> Any:
    if isinstance(value, str):
        return datetime.fromisoformat(value)
    return value


def _row_to_report(row: aiosqlite.Row) -> HealthReport:
    return HealthReport(
        id=row["id"],
        user_id=row["user_id"],
        wellness_score=row["wellness_score"],
        heart_rate=row["heart_rate"],
        oxygen_level=row["oxygen_level"],
        blood_sugar=row["blood_sugar"],
        stress_level=row["stress_level"],
        energy_level=row["energy_level"],
        detected_mood=row["detected_mood"],
        mood_confidence=row["mood_confidence"],
        scan_duration=row["scan_duration"],
        created_at=_parse_timestamp(row["created_at"])
    )


class ReportStore:
    """Report and badge persistence for a single database connection."""

    def __init__(self, db: aiosqlite.Connection):
        self.db = db

    async def user_exists(self, user_id: int) -> bool:
        cursor = await self.db.execute("SELECT id FROM users WHERE id = ?", (user_id,))
        return await cursor.fetchone() is not None

    async def create_health_report(
        self,
        user_id: int,
        wellness_score: int,
        heart_rate: int,
        oxygen_level: int,
        blood_sugar: int,
        stress_level: str,
        energy_level: str,
        detected_mood: str,
        mood_confidence: int,
        face_image_data: Optional[str] = None,
        scan_duration: int = 10,
        created_at: Optional[datetime] = None
    ) -> HealthReport:
        """
        Insert a new report and commit it.

        Bounded fields are clamped and labels normalized before the insert.
        """
        created_at = created_at or datetime.now()

        ciphertext = iv = tag = media_type = None
        if face_image_data:
            ciphertext, iv, tag, media_type = encrypt_face_image(face_image_data)

        cursor = await self.db.execute(
            """INSERT INTO health_reports
               (user_id, wellness_score, heart_rate, oxygen_level, blood_sugar,
                stress_level, energy_level, detected_mood, mood_confidence,
                face_image_encrypted, face_image_type, iv, tag, scan_duration, created_at)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                user_id,
                clamp_metric("wellness_score", wellness_score),
                clamp_metric("heart_rate", heart_rate),
                clamp_metric("oxygen_level", oxygen_level),
                clamp_metric("blood_sugar", blood_sugar),
                normalize_stress_level(stress_level),
                normalize_energy_level(energy_level),
                normalize_mood(detected_mood),
                clamp_metric("mood_confidence", mood_confidence),
                ciphertext,
                media_type,
                iv,
                tag,
                scan_duration,
                created_at.isoformat(sep=" ", timespec="microseconds")
            )
        )
        report_id = cursor.lastrowid
        await self.db.commit()

        logger.info(f"Created health report {report_id} for user {user_id}")

        report = await self.get_health_report(report_id)
        return HealthReport(**report.model_dump(exclude={"face_image_data"}))

    async def get_user_health_reports(self, user_id: int, limit: int = 10) -> list[HealthReport]:
        """Most recent reports for a user, newest first."""
        cursor = await self.db.execute(
            f"""SELECT {REPORT_COLUMNS}
                FROM health_reports
                WHERE user_id = ?
                ORDER BY created_at DESC, id DESC
                LIMIT ?""",
            (user_id, limit)
        )
        rows = await cursor.fetchall()
        return [_row_to_report(row) for row in rows]

    async def get_user_health_reports_since(
        self,
        user_id: int,
        since: datetime
    ) -> list[HealthReport]:
        """Reports created at or after `since`, oldest first."""
        cursor = await self.db.execute(
            f"""SELECT {REPORT_COLUMNS}
                FROM health_reports
                WHERE user_id = ? AND created_at >= ?
                ORDER BY created_at ASC, id ASC""",
            (user_id, since.isoformat(sep=" ", timespec="microseconds"))
        )
        rows = await cursor.fetchall()
        return [_row_to_report(row) for row in rows]

    async def get_latest_health_report(self, user_id: int) -> Optional[HealthReport]:
        reports = await self.get_user_health_reports(user_id, limit=1)
        return reports[0] if reports else None

    async def get_health_report(self, report_id: int) -> Optional[HealthReportDetail]:
        """Single report with its face snapshot decrypted."""
        cursor = await self.db.execute(
            f"""SELECT {REPORT_COLUMNS}, face_image_encrypted, face_image_type, iv, tag
                FROM health_reports WHERE id = ?""",
            (report_id,)
        )
        row = await cursor.fetchone()
        if not row:
            return None

        face_image_data = None
        if row["face_image_encrypted"] is not None:
            face_image_data = decrypt_face_image(
                row["face_image_encrypted"], row["iv"], row["tag"], row["face_image_type"]
            )

        report = _row_to_report(row)
        return HealthReportDetail(**report.model_dump(), face_image_data=face_image_data)

    async def count_user_health_reports(self, user_id: int) -> int:
        cursor = await self.db.execute(
            "SELECT COUNT(*) FROM health_reports WHERE user_id = ?",
            (user_id,)
        )
        return (await cursor.fetchone())[0]

    async def get_user_report_dates(self, user_id: int) -> list[date]:
        """Distinct calendar days with at least one report, newest first."""
        cursor = await self.db.execute(
            """SELECT DISTINCT date(created_at) AS day
               FROM health_reports
               WHERE user_id = ?
               ORDER BY day DESC""",
            (user_id,)
        )
        rows = await cursor.fetchall()
        return [date.fromisoformat(row["day"]) for row in rows if row["day"]]

    async def get_user_badges(self, user_id: int) -> list[Badge]:
        """All badges for a user, most recently earned first."""
        cursor = await self.db.execute(
            """SELECT id, user_id, badge_type, earned_at
               FROM health_badges
               WHERE user_id = ?
               ORDER BY earned_at DESC, id DESC""",
            (user_id,)
        )
        rows = await cursor.fetchall()
        return [
            Badge(
                id=row["id"],
                user_id=row["user_id"],
                badge_type=row["badge_type"],
                earned_at=_parse_timestamp(row["earned_at"])
            )
            for row in rows
        ]

    async def get_user_badge_types(self, user_id: int) -> set[str]:
        cursor = await self.db.execute(
            "SELECT badge_type FROM health_badges WHERE user_id = ?",
            (user_id,)
        )
        rows = await cursor.fetchall()
        return {row["badge_type"] for row in rows}

    async def award_badge(self, user_id: int, badge_type: str) -> bool:
        """
        Award a badge to a user if not already earned.

        Returns:
            True if badge was newly awarded, False if already had it
        """
        try:
            await self.db.execute(
                "INSERT INTO health_badges (user_id, badge_type) VALUES (?, ?)",
                (user_id, badge_type)
            )
            await self.db.commit()
            logger.info(f"Badge '{badge_type}' awarded to user {user_id}")
            return True
        except aiosqlite.IntegrityError:
            # Badge already exists
            return False
