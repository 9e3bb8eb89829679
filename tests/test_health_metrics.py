import random

import pytest

from database.models import EnergyLevel, Mood, StressLevel
from services.health_metrics import (
    METRIC_RANGES,
    MetricsGenerator,
    clamp_metric,
    generate_health_metrics,
    normalize_confidence,
    normalize_mood,
)


class MaxRandom(random.Random):
    """Always picks the top of the requested range."""

    def randint(self, a, b):
        return b


class MinRandom(random.Random):
    """Always picks the bottom of the requested range."""

    def randint(self, a, b):
        return a


EXPECTED_LABELS = {
    Mood.HAPPY: (StressLevel.LOW, EnergyLevel.HIGH),
    Mood.SAD: (StressLevel.MEDIUM, EnergyLevel.LOW),
    Mood.ANGRY: (StressLevel.HIGH, EnergyLevel.HIGH),
    Mood.SURPRISED: (StressLevel.MEDIUM, EnergyLevel.HIGH),
    Mood.FEAR: (StressLevel.HIGH, EnergyLevel.LOW),
    Mood.NEUTRAL: (StressLevel.LOW, EnergyLevel.NORMAL),
}


@pytest.mark.parametrize("mood", list(Mood.ALL) + ["HAPPY", "unknown", ""])
def test_generated_metrics_stay_in_range(mood, seeded_rng):
    generator = MetricsGenerator(rng=seeded_rng)

    for _ in range(1000):
        metrics = generator.generate(mood)
        for field in ("wellness_score", "heart_rate", "oxygen_level", "blood_sugar"):
            low, high = METRIC_RANGES[field]
            assert low <= getattr(metrics, field) <= high, (field, metrics)
        assert metrics.stress_level in StressLevel.ALL
        assert metrics.energy_level in EnergyLevel.ALL


@pytest.mark.parametrize("mood,labels", EXPECTED_LABELS.items())
def test_mood_sets_stress_and_energy(mood, labels):
    metrics = generate_health_metrics(mood, rng=random.Random(7))
    assert (metrics.stress_level, metrics.energy_level) == labels


def test_mood_is_case_insensitive():
    upper = generate_health_metrics("FeAr", rng=random.Random(3))
    lower = generate_health_metrics("fear", rng=random.Random(3))
    assert upper == lower


def test_unknown_mood_uses_neutral_row():
    unknown = generate_health_metrics("bored", rng=random.Random(11))
    neutral = generate_health_metrics("neutral", rng=random.Random(11))
    assert unknown == neutral


def test_non_string_mood_falls_back_to_neutral():
    metrics = generate_health_metrics(None, rng=random.Random(5))
    assert (metrics.stress_level, metrics.energy_level) == EXPECTED_LABELS[Mood.NEUTRAL]


def test_same_seed_reproduces_sequence():
    first = MetricsGenerator(rng=random.Random(99))
    second = MetricsGenerator(rng=random.Random(99))
    assert [first.generate("sad") for _ in range(20)] == [second.generate("sad") for _ in range(20)]


def test_happy_upper_bounds_with_pinned_random():
    metrics = generate_health_metrics("happy", rng=MaxRandom())
    assert metrics.wellness_score == 75 + 15 + 4
    assert metrics.heart_rate == 75 + 4 + 3
    assert metrics.oxygen_level == 100
    assert metrics.blood_sugar == 95 + 9


def test_happy_lower_bounds_with_pinned_random():
    metrics = generate_health_metrics("happy", rng=MinRandom())
    assert metrics.wellness_score == 75 + 15 - 5
    assert metrics.heart_rate == 75 - 5 - 4
    assert metrics.oxygen_level == 97 - 2
    assert metrics.blood_sugar == 95 - 10


def test_fear_adjustments_with_pinned_random():
    metrics = generate_health_metrics("fear", rng=MaxRandom())
    assert metrics.wellness_score == 75 - 20 + 4
    assert metrics.heart_rate == 75 + 39 + 3
    assert metrics.oxygen_level == 97 - 3 + 1
    assert metrics.blood_sugar == 95 + 19 + 9


def test_angry_raises_blood_sugar():
    metrics = generate_health_metrics("angry", rng=MinRandom())
    assert metrics.blood_sugar == 95 + 10 - 10
    assert metrics.heart_rate == 75 + 10 - 4


@pytest.mark.parametrize("field,value,expected", [
    ("heart_rate", 10, 50),
    ("heart_rate", 300, 120),
    ("oxygen_level", 70, 85),
    ("blood_sugar", 500, 180),
    ("wellness_score", -4, 0),
    ("mood_confidence", 101, 100),
])
def test_clamp_metric(field, value, expected):
    assert clamp_metric(field, value) == expected


@pytest.mark.parametrize("value,expected", [
    (0.87, 87),
    (0.5, 50),
    (1, 1),
    (0, 0),
    (64, 64),
    (250, 100),
    (-3, 0),
    ("abc", 0),
    (None, 0),
    (float("inf"), 0),
    (float("-inf"), 0),
    (float("nan"), 0),
])
def test_normalize_confidence(value, expected):
    assert normalize_confidence(value) == expected


def test_normalize_mood():
    assert normalize_mood("  Surprised ") == Mood.SURPRISED
    assert normalize_mood("disgust") == Mood.NEUTRAL
