# =============================================================================
# HEALTH MONITOR BACKEND - RECOMMENDATIONS
# =============================================================================
"""
Plain-language advice, wellness levels and daily tips derived from reports.
"""

from datetime import date
from typing import Any, Optional

from database.models import EnergyLevel, StressLevel

DAILY_TIPS = [
    "Take a 15-minute walk outside to boost your mood and energy levels!",
    "Drink at least 8 glasses of water today for optimal hydration.",
    "Practice deep breathing for 5 minutes to reduce stress levels.",
    "Get 7-9 hours of quality sleep for better overall health.",
    "Include more fruits and vegetables in your meals today.",
    "Take regular breaks from screen time to protect your eyes.",
    "Do some light stretching to improve flexibility and reduce tension.",
    "Practice gratitude by writing down 3 things you're thankful for.",
]


def get_wellness_level(score: int) -> str:
    """Bucket a wellness score into a display level."""
    if score >= 80:
        return "Excellent"
    if score >= 60:
        return "Good"
    if score >= 40:
        return "Fair"
    return "Needs Attention"


def get_health_recommendations(metrics: Any) -> list[str]:
    """
    Build recommendations from a report or HealthMetrics.

    Falls back to general maintenance advice when nothing stands out.
    """
    recommendations = []

    heart_rate = getattr(metrics, "heart_rate", None)
    oxygen_level = getattr(metrics, "oxygen_level", None)
    blood_sugar = getattr(metrics, "blood_sugar", None)

    if heart_rate is not None:
        if heart_rate > 100:
            recommendations.append("Consider relaxation techniques to lower your heart rate.")
        elif heart_rate < 60:
            recommendations.append("Light exercise could help improve your cardiovascular health.")

    if oxygen_level is not None and oxygen_level < 95:
        recommendations.append("Practice deep breathing exercises to improve oxygen levels.")

    if blood_sugar is not None:
        if blood_sugar > 140:
            recommendations.append("Monitor your diet and consider reducing sugar intake.")
        elif blood_sugar < 70:
            recommendations.append("Consider eating a healthy snack to stabilize blood sugar.")

    if getattr(metrics, "stress_level", None) == StressLevel.HIGH:
        recommendations.append("Try meditation or stress-reduction techniques.")

    if getattr(metrics, "energy_level", None) == EnergyLevel.LOW:
        recommendations.append("Ensure you're getting adequate sleep and nutrition.")

    if not recommendations:
        recommendations.append("Maintain your current healthy lifestyle!")
        recommendations.append("Stay hydrated and get regular exercise.")

    return recommendations


def daily_tip(day: Optional[date] = None) -> str:
    """Tip of the day, rotating by day of month."""
    day = day or date.today()
    return DAILY_TIPS[day.day % len(DAILY_TIPS)]
