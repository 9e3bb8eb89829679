# =============================================================================
# HEALTH MONITOR BACKEND - HEALTH METRICS GENERATOR
# =============================================================================
"""
Synthetic health metrics generator.

Maps a detected mood to a bounded, pseudo-randomized set of vital-sign values
and a built-in wellness score. The random source is injectable so callers can
pin reproducible sequences.
"""

import logging
import math
import random
from dataclasses import dataclass, asdict
from typing import Optional

from database.models import Mood, StressLevel, EnergyLevel

logger = logging.getLogger(__name__)

# Inclusive (min, max) bounds enforced before persistence
METRIC_RANGES: dict[str, tuple[int, int]] = {
    "wellness_score": (0, 100),
    "heart_rate": (50, 120),
    "oxygen_level": (85, 100),
    "blood_sugar": (60, 180),
    "mood_confidence": (0, 100),
}

BASELINE_WELLNESS = 75
BASELINE_HEART_RATE = 75
BASELINE_OXYGEN = 97
BASELINE_BLOOD_SUGAR = 95


@dataclass(frozen=True)
class HealthMetrics:
    """Generated vitals for a single scan."""
    wellness_score: int
    heart_rate: int
    oxygen_level: int
    blood_sugar: int
    stress_level: str
    energy_level: str

    def to_dict(self) -> dict:
        return asdict(self)


def clamp_metric(name: str, value: int) -> int:
    """Clamp a bounded field into its declared range."""
    low, high = METRIC_RANGES[name]
    return max(low, min(high, int(value)))


def normalize_mood(mood: Optional[str]) -> str:
    """Lower-case a mood label; anything unrecognised becomes neutral."""
    if not isinstance(mood, str):
        return Mood.NEUTRAL
    label = mood.strip().lower()
    return label if label in Mood.ALL else Mood.NEUTRAL


def normalize_stress_level(level: Optional[str]) -> str:
    """Canonical stress label, Medium when unrecognised."""
    if isinstance(level, str):
        for known in StressLevel.ALL:
            if level.strip().lower() == known.lower():
                return known
    return StressLevel.MEDIUM


def normalize_energy_level(level: Optional[str]) -> str:
    """Canonical energy label, Normal when unrecognised."""
    if isinstance(level, str):
        for known in EnergyLevel.ALL:
            if level.strip().lower() == known.lower():
                return known
    return EnergyLevel.NORMAL


def normalize_confidence(confidence: Optional[float]) -> int:
    """
    Convert a detector confidence to a 0-100 percentage.

    Values below 1 are treated as fractions; anything else as a percentage.
    Non-numeric and non-finite values give 0.
    """
    try:
        value = float(confidence)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(value):
        return 0
    if 0.0 <= value < 1.0:
        value *= 100
    return clamp_metric("mood_confidence", round(value))


class MetricsGenerator:
    """
    Mood-driven vitals generator.

    Each mood shifts the baselines by a fixed or random delta and fixes the
    stress/energy labels; a second independent jitter is then applied to every
    numeric field before clamping.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng if rng is not None else random.Random()

    def _spread(self, low: int, high: int) -> int:
        """Uniform integer in [low, high]."""
        return self.rng.randint(low, high)

    def generate(self, mood: Optional[str]) -> HealthMetrics:
        """
        Generate health metrics for a detected mood.

        Args:
            mood: Mood label, case-insensitive. Unknown labels use the
                neutral adjustments.

        Returns:
            HealthMetrics with every numeric field inside METRIC_RANGES
        """
        wellness = BASELINE_WELLNESS
        heart_rate = BASELINE_HEART_RATE
        oxygen = BASELINE_OXYGEN
        blood_sugar = BASELINE_BLOOD_SUGAR

        label = normalize_mood(mood)

        if label == Mood.HAPPY:
            wellness += 15
            heart_rate += self._spread(-5, 4)
            oxygen += self._spread(0, 2)
            stress, energy = StressLevel.LOW, EnergyLevel.HIGH
        elif label == Mood.SAD:
            wellness -= 10
            heart_rate += self._spread(5, 19)
            oxygen -= self._spread(0, 1)
            stress, energy = StressLevel.MEDIUM, EnergyLevel.LOW
        elif label == Mood.ANGRY:
            wellness -= 15
            heart_rate += self._spread(10, 29)
            oxygen -= self._spread(0, 2)
            blood_sugar += self._spread(10, 29)
            stress, energy = StressLevel.HIGH, EnergyLevel.HIGH
        elif label == Mood.SURPRISED:
            wellness += 5
            heart_rate += self._spread(5, 19)
            stress, energy = StressLevel.MEDIUM, EnergyLevel.HIGH
        elif label == Mood.FEAR:
            wellness -= 20
            heart_rate += self._spread(15, 39)
            oxygen -= self._spread(0, 3)
            blood_sugar += self._spread(5, 19)
            stress, energy = StressLevel.HIGH, EnergyLevel.LOW
        else:
            wellness += self._spread(-5, 4)
            heart_rate += self._spread(-5, 4)
            stress, energy = StressLevel.LOW, EnergyLevel.NORMAL

        # Independent jitter for realism
        metrics = HealthMetrics(
            wellness_score=clamp_metric("wellness_score", wellness + self._spread(-5, 4)),
            heart_rate=clamp_metric("heart_rate", heart_rate + self._spread(-4, 3)),
            oxygen_level=clamp_metric("oxygen_level", oxygen + self._spread(-2, 1)),
            blood_sugar=clamp_metric("blood_sugar", blood_sugar + self._spread(-10, 9)),
            stress_level=stress,
            energy_level=energy,
        )

        logger.debug(f"Generated metrics for mood={label}: {metrics}")

        return metrics


def generate_health_metrics(
    mood: Optional[str],
    rng: Optional[random.Random] = None
) -> HealthMetrics:
    """
    Convenience function for metrics generation.

    Args:
        mood: Detected mood label
        rng: Optional random source; a fresh one is used when omitted

    Returns:
        Generated HealthMetrics
    """
    return MetricsGenerator(rng=rng).generate(mood)
