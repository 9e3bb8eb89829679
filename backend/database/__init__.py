# =============================================================================
# HEALTH MONITOR BACKEND - DATABASE PACKAGE
# =============================================================================
"""Database module exports."""

from .connection import get_db, init_database, close_database
from .models import User, HealthReport, Badge, BadgeType, Mood, StressLevel, EnergyLevel

__all__ = [
    "get_db",
    "init_database",
    "close_database",
    "User",
    "HealthReport",
    "Badge",
    "BadgeType",
    "Mood",
    "StressLevel",
    "EnergyLevel"
]
