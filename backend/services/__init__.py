# =============================================================================
# HEALTH MONITOR BACKEND - SERVICES PACKAGE
# =============================================================================
"""Services module exports."""

from .health_metrics import HealthMetrics, MetricsGenerator, generate_health_metrics
from .wellness_scoring import WellnessScoringEngine, calculate_wellness_score
from .gamification import GamificationService, evaluate_badges, calculate_streak
from .report_store import ReportStore
from .air_quality_client import AirQualityClient
from .wellness import WellnessService

__all__ = [
    "HealthMetrics",
    "MetricsGenerator",
    "generate_health_metrics",
    "WellnessScoringEngine",
    "calculate_wellness_score",
    "GamificationService",
    "evaluate_badges",
    "calculate_streak",
    "ReportStore",
    "AirQualityClient",
    "WellnessService"
]
