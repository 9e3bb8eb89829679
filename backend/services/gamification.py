# =============================================================================
# HEALTH MONITOR BACKEND - GAMIFICATION SERVICE
# =============================================================================
"""
Gamification service for streaks and badge management.
Implements engagement mechanics to encourage consistent usage.
"""

import logging
from datetime import date, datetime, timedelta
from typing import Any, Iterable, Optional, Sequence

from database.models import BadgeType, Streak
from services.report_store import ReportStore

logger = logging.getLogger(__name__)

CONSISTENCY_DAYS = 7
WELLNESS_MASTER_REPORTS = 30
WELLNESS_MASTER_MIN_AVERAGE = 80


def _field(report: Any, name: str) -> Any:
    """Read a field from a report model or a plain mapping."""
    if isinstance(report, dict):
        return report.get(name)
    return getattr(report, name, None)


def report_date(report: Any) -> Optional[date]:
    """Calendar day a report was created on."""
    created_at = _field(report, "created_at")
    if isinstance(created_at, str):
        try:
            created_at = datetime.fromisoformat(created_at)
        except ValueError:
            return None
    if isinstance(created_at, datetime):
        return created_at.date()
    if isinstance(created_at, date):
        return created_at
    return None


def has_consecutive_days(reports: Sequence[Any], days: int = CONSISTENCY_DAYS) -> bool:
    """
    Check that the given reports fall on `days` distinct consecutive dates.

    Dates are de-duplicated first, so several reports on the same day count
    once and leave the run short.
    """
    if len(reports) < days:
        return False

    unique_dates = {report_date(r) for r in reports}
    if None in unique_dates or len(unique_dates) != days:
        return False

    ordered = sorted(unique_dates)
    return all(
        later - earlier == timedelta(days=1)
        for earlier, later in zip(ordered, ordered[1:])
    )


def average_wellness_score(reports: Sequence[Any]) -> float:
    """Arithmetic mean of wellness scores, 0.0 for no reports."""
    if not reports:
        return 0.0
    return sum(_field(r, "wellness_score") or 0 for r in reports) / len(reports)


def evaluate_badges(history: Sequence[Any], held: Iterable[str]) -> list[str]:
    """
    Decide which badges newly qualify.

    Args:
        history: User's reports ordered newest first, including the one
            just created
        held: Badge types the user already has

    Returns:
        Badge types to award, never one that is already held

    Rules:
    - health_beginner: exactly one report exists
    - consistency_pro: 7 most recent reports on 7 consecutive days
    - wellness_master: 30 most recent reports average a score above 80
    - health_champion: reserved, never awarded here
    """
    held = set(held)
    qualifying = []

    if len(history) == 1:
        qualifying.append(BadgeType.HEALTH_BEGINNER)

    if len(history) >= CONSISTENCY_DAYS and has_consecutive_days(history[:CONSISTENCY_DAYS]):
        qualifying.append(BadgeType.CONSISTENCY_PRO)

    if len(history) >= WELLNESS_MASTER_REPORTS:
        recent = history[:WELLNESS_MASTER_REPORTS]
        if average_wellness_score(recent) > WELLNESS_MASTER_MIN_AVERAGE:
            qualifying.append(BadgeType.WELLNESS_MASTER)

    return [badge for badge in qualifying if badge not in held]


def calculate_streak(dates: Iterable[date], today: Optional[date] = None) -> Streak:
    """
    Compute current and longest runs of consecutive reporting days.

    The current streak only counts if the latest report is from today or
    yesterday.
    """
    report_dates = sorted(set(dates), reverse=True)
    if not report_dates:
        return Streak()

    today = today or date.today()
    last_report = report_dates[0]

    current_streak = 0
    if last_report >= today - timedelta(days=1):
        current_streak = 1
        for i in range(1, len(report_dates)):
            if report_dates[i] == report_dates[i - 1] - timedelta(days=1):
                current_streak += 1
            else:
                break

    longest = 1
    run = 1
    for i in range(1, len(report_dates)):
        if report_dates[i] == report_dates[i - 1] - timedelta(days=1):
            run += 1
            longest = max(longest, run)
        else:
            run = 1

    return Streak(
        current_streak=current_streak,
        longest_streak=longest,
        last_report_date=last_report
    )


class GamificationService:
    """
    Gamification service managing streaks and badges.

    Badges are evaluated once per created report against the freshly
    updated history and awarded through the store's idempotent upsert.
    """

    def __init__(self, store: ReportStore, history_window: int = WELLNESS_MASTER_REPORTS):
        self.store = store
        self.history_window = history_window

    async def check_and_award_badges(self, user_id: int) -> list[str]:
        """
        Evaluate badge rules for a user and persist new badges.

        Must run after the triggering report has been committed.

        Returns:
            List of newly awarded badge types
        """
        limit = max(self.history_window, WELLNESS_MASTER_REPORTS)
        history = await self.store.get_user_health_reports(user_id, limit=limit)
        held = await self.store.get_user_badge_types(user_id)

        awarded = []
        for badge_type in evaluate_badges(history, held):
            if await self.store.award_badge(user_id, badge_type):
                awarded.append(badge_type)

        if awarded:
            logger.info(f"User {user_id} earned badges: {', '.join(awarded)}")

        return awarded

    async def get_streak_info(self, user_id: int) -> Streak:
        """Get streak information for a user."""
        dates = await self.store.get_user_report_dates(user_id)
        return calculate_streak(dates)
