# =============================================================================
# HEALTH MONITOR BACKEND - WELLNESS SCORING ENGINE
# =============================================================================
"""
Wellness Scoring Engine that turns any subset of vitals into a 0-100 score.
Each present metric earns 25, 15 or 5 points; the result is the rounded mean
over the metrics that were actually supplied.
"""

import logging
from dataclasses import is_dataclass, asdict
from typing import Any, Mapping, Optional, Union

from database.models import StressLevel

logger = logging.getLogger(__name__)

OPTIMAL_POINTS = 25
ACCEPTABLE_POINTS = 15
POOR_POINTS = 5

STRESS_POINTS = {
    StressLevel.LOW.lower(): OPTIMAL_POINTS,
    StressLevel.MEDIUM.lower(): ACCEPTABLE_POINTS,
    StressLevel.HIGH.lower(): POOR_POINTS,
}

# Accepted spellings for each scored field
FIELD_ALIASES = {
    "heart_rate": ("heart_rate", "heartRate"),
    "oxygen_level": ("oxygen_level", "oxygenLevel"),
    "blood_sugar": ("blood_sugar", "bloodSugar"),
    "stress_level": ("stress_level", "stressLevel"),
}


def _as_number(value: Any) -> Optional[float]:
    """Numeric value or None when missing/malformed."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if number != number:  # NaN
        return None
    return number


def _in_range(value: float, low: float, high: float) -> bool:
    return low <= value <= high


class WellnessScoringEngine:
    """
    Wellness Scoring Engine.

    Points per metric:
    - Heart rate: 25 in [60, 100], 15 in [50, 120], else 5
    - Oxygen: 25 at >= 95, 15 at >= 90, else 5
    - Blood sugar: 25 in [70, 140], 15 in [60, 180], else 5
    - Stress: 25 Low, 15 Medium, 5 High
    """

    def score_heart_rate(self, heart_rate: float) -> int:
        if _in_range(heart_rate, 60, 100):
            return OPTIMAL_POINTS
        if _in_range(heart_rate, 50, 120):
            return ACCEPTABLE_POINTS
        return POOR_POINTS

    def score_oxygen_level(self, oxygen_level: float) -> int:
        if oxygen_level >= 95:
            return OPTIMAL_POINTS
        if oxygen_level >= 90:
            return ACCEPTABLE_POINTS
        return POOR_POINTS

    def score_blood_sugar(self, blood_sugar: float) -> int:
        if _in_range(blood_sugar, 70, 140):
            return OPTIMAL_POINTS
        if _in_range(blood_sugar, 60, 180):
            return ACCEPTABLE_POINTS
        return POOR_POINTS

    def score_stress_level(self, stress_level: Any) -> Optional[int]:
        if not isinstance(stress_level, str):
            return None
        return STRESS_POINTS.get(stress_level.strip().lower())

    def calculate(
        self,
        heart_rate: Any = None,
        oxygen_level: Any = None,
        blood_sugar: Any = None,
        stress_level: Any = None
    ) -> int:
        """
        Calculate the wellness score from the supplied metrics.

        Args:
            heart_rate: Beats per minute
            oxygen_level: Blood oxygen percent
            blood_sugar: mg/dL
            stress_level: Low, Medium or High (case-insensitive)

        Returns:
            Rounded mean of the awarded points, 0 when nothing usable is given
        """
        awarded: list[int] = []

        value = _as_number(heart_rate)
        if value is not None:
            awarded.append(self.score_heart_rate(value))

        value = _as_number(oxygen_level)
        if value is not None:
            awarded.append(self.score_oxygen_level(value))

        value = _as_number(blood_sugar)
        if value is not None:
            awarded.append(self.score_blood_sugar(value))

        stress_points = self.score_stress_level(stress_level)
        if stress_points is not None:
            awarded.append(stress_points)

        if not awarded:
            logger.debug("No valid metrics provided for wellness calculation")
            return 0

        # Half-up rounding; every sum here is positive
        score = int(sum(awarded) / len(awarded) + 0.5)

        logger.debug(
            f"Wellness score calculated: {score} "
            f"(heart_rate={heart_rate}, oxygen_level={oxygen_level}, "
            f"blood_sugar={blood_sugar}, stress_level={stress_level})"
        )

        return score


def _extract(metrics: Mapping[str, Any], field: str) -> Any:
    for key in FIELD_ALIASES[field]:
        if key in metrics:
            return metrics[key]
    return None


def calculate_wellness_score(metrics: Union[Mapping[str, Any], Any, None]) -> int:
    """
    Convenience function for wellness score calculation.

    Args:
        metrics: Mapping (snake_case or camelCase keys) or a dataclass such
            as HealthMetrics. Any subset of fields may be present.

    Returns:
        Score between 0 and 100
    """
    if is_dataclass(metrics) and not isinstance(metrics, type):
        metrics = asdict(metrics)
    if not isinstance(metrics, Mapping):
        return 0

    engine = WellnessScoringEngine()
    return engine.calculate(
        heart_rate=_extract(metrics, "heart_rate"),
        oxygen_level=_extract(metrics, "oxygen_level"),
        blood_sugar=_extract(metrics, "blood_sugar"),
        stress_level=_extract(metrics, "stress_level")
    )
