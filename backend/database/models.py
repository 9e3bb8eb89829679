# =============================================================================
# HEALTH MONITOR BACKEND - DATABASE MODELS
# =============================================================================
"""
Pydantic models for database entities.
Used for request/response validation and type safety.
"""

from datetime import datetime, date
from typing import Optional
from pydantic import BaseModel, Field


# =============================================================================
# ENUMERATIONS
# =============================================================================

class Mood:
    """Mood labels produced by the client-side face analysis."""
    HAPPY = "happy"
    SAD = "sad"
    ANGRY = "angry"
    SURPRISED = "surprised"
    FEAR = "fear"
    NEUTRAL = "neutral"

    ALL = (HAPPY, SAD, ANGRY, SURPRISED, FEAR, NEUTRAL)


class StressLevel:
    """Stress level labels."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    ALL = (LOW, MEDIUM, HIGH)


class EnergyLevel:
    """Energy level labels."""
    LOW = "Low"
    NORMAL = "Normal"
    HIGH = "High"

    ALL = (LOW, NORMAL, HIGH)


class BadgeType:
    """Badge type constants."""
    HEALTH_BEGINNER = "health_beginner"  # First report created
    CONSISTENCY_PRO = "consistency_pro"  # 7 most recent reports on 7 consecutive days
    WELLNESS_MASTER = "wellness_master"  # 30 most recent reports average score > 80
    HEALTH_CHAMPION = "health_champion"  # Reserved, no award rule

    ALL = (HEALTH_BEGINNER, CONSISTENCY_PRO, WELLNESS_MASTER, HEALTH_CHAMPION)


# =============================================================================
# USER MODELS
# =============================================================================

class UserBase(BaseModel):
    """Base user model."""
    email: str = Field(..., max_length=254, pattern=r"^[^@\s]+@[^@\s]+$")
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)


class UserCreate(UserBase):
    """User creation request."""


class User(UserBase):
    """User response model."""
    id: int
    created_at: datetime

    class Config:
        from_attributes = True


class Streak(BaseModel):
    """Consecutive-day reporting streak."""
    current_streak: int = 0
    longest_streak: int = 0
    last_report_date: Optional[date] = None


class UserWithStats(User):
    """User with statistics."""
    total_reports: int = 0
    latest_wellness_score: Optional[int] = None
    wellness_level: Optional[str] = None
    streak: Streak = Field(default_factory=Streak)
    badges: list[str] = []


class UserPreferences(BaseModel):
    """Per-user display and session preferences."""
    user_id: int
    dark_mode: bool = False
    language: str = "en"
    notifications_enabled: bool = True
    auto_logout_minutes: int = Field(default=10, ge=1, le=240)


class UserPreferencesUpdate(BaseModel):
    """Partial preferences update; omitted fields keep their value."""
    dark_mode: Optional[bool] = None
    language: Optional[str] = Field(default=None, min_length=2, max_length=10)
    notifications_enabled: Optional[bool] = None
    auto_logout_minutes: Optional[int] = Field(default=None, ge=1, le=240)


# =============================================================================
# HEALTH REPORT MODELS
# =============================================================================

class HealthReportCreate(BaseModel):
    """
    Full health report submitted by a client.

    Numeric fields are not range-checked here; they are clamped into their
    declared ranges before persistence.
    """
    wellness_score: int
    heart_rate: int
    oxygen_level: int
    blood_sugar: int
    stress_level: str
    energy_level: str
    detected_mood: str
    mood_confidence: int
    face_image_data: Optional[str] = None
    scan_duration: int = Field(default=10, ge=1, le=600)


class ScanRequest(BaseModel):
    """Completed face scan: mood from the face analysis plus its confidence."""
    mood: str = Field(..., min_length=1, max_length=32)
    confidence: float = Field(..., description="Mood confidence, a fraction below 1 or a 0-100 percentage")
    face_image: Optional[str] = Field(
        default=None,
        description="Base64 snapshot of the scanned face"
    )
    scan_duration: int = Field(default=10, ge=1, le=600)


class HealthReport(BaseModel):
    """Persisted health report."""
    id: int
    user_id: int
    wellness_score: int = Field(..., ge=0, le=100)
    heart_rate: int = Field(..., ge=50, le=120)
    oxygen_level: int = Field(..., ge=85, le=100)
    blood_sugar: int = Field(..., ge=60, le=180)
    stress_level: str
    energy_level: str
    detected_mood: str
    mood_confidence: int = Field(..., ge=0, le=100)
    scan_duration: int = 10
    created_at: datetime


class HealthReportDetail(HealthReport):
    """Single report including the decrypted face snapshot."""
    face_image_data: Optional[str] = None


class ReportCreated(BaseModel):
    """Result of creating a report: the report and any badges it unlocked."""
    report: HealthReport
    new_badges: list[str] = []


class Recommendations(BaseModel):
    """Advice derived from a single report."""
    report_id: int
    wellness_level: str
    recommendations: list[str]


# =============================================================================
# TREND MODELS
# =============================================================================

class TrendPoint(BaseModel):
    """One report in a chronological trend series."""
    report_id: int
    created_at: datetime
    wellness_score: int
    heart_rate: int
    oxygen_level: int
    blood_sugar: int


class HealthTrends(BaseModel):
    """Chronological series of the most recent reports."""
    user_id: int
    points: list[TrendPoint]
    average_wellness_score: Optional[float] = None
    average_heart_rate: Optional[float] = None
    average_oxygen_level: Optional[float] = None


# =============================================================================
# GAMIFICATION MODELS
# =============================================================================

class Badge(BaseModel):
    """Badge achievement."""
    id: int
    user_id: int
    badge_type: str
    earned_at: datetime
