# =============================================================================
# HEALTH MONITOR BACKEND - USER ROUTES
# =============================================================================
"""
API routes for user management operations.
Handles user creation, retrieval, preferences, badges and profile statistics.
"""

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException

import aiosqlite

from database.connection import get_db
from database.models import (
    Badge,
    User,
    UserCreate,
    UserPreferences,
    UserPreferencesUpdate,
    UserWithStats,
)
from services.gamification import GamificationService
from services.recommendations import get_wellness_level
from services.report_store import ReportStore

logger = logging.getLogger(__name__)
router = APIRouter()


def _row_to_user(row: aiosqlite.Row) -> User:
    created_at = row["created_at"]
    if isinstance(created_at, str):
        created_at = datetime.fromisoformat(created_at)
    return User(
        id=row["id"],
        email=row["email"],
        first_name=row["first_name"],
        last_name=row["last_name"],
        created_at=created_at
    )


async def _get_user_or_404(db: aiosqlite.Connection, user_id: int) -> User:
    cursor = await db.execute(
        "SELECT id, email, first_name, last_name, created_at FROM users WHERE id = ?",
        (user_id,)
    )
    row = await cursor.fetchone()

    if not row:
        raise HTTPException(status_code=404, detail="User not found")

    return _row_to_user(row)


@router.post("/users", response_model=User, status_code=201)
async def create_user(
    user: UserCreate,
    db: aiosqlite.Connection = Depends(get_db)
):
    """
    Create a new user.

    Default preferences are created alongside the user.
    """
    try:
        cursor = await db.execute(
            "INSERT INTO users (email, first_name, last_name) VALUES (?, ?, ?)",
            (user.email.lower(), user.first_name, user.last_name)
        )
    except aiosqlite.IntegrityError:
        raise HTTPException(status_code=409, detail="Email already registered")
    user_id = cursor.lastrowid

    await db.execute(
        "INSERT INTO user_preferences (user_id) VALUES (?)",
        (user_id,)
    )

    await db.commit()

    logger.info(f"Created user: {user.email} (id={user_id})")

    return await _get_user_or_404(db, user_id)


@router.get("/users/{user_id}", response_model=User)
async def get_user(
    user_id: int,
    db: aiosqlite.Connection = Depends(get_db)
):
    """Get a user by ID."""
    return await _get_user_or_404(db, user_id)


@router.get("/users/{user_id}/stats", response_model=UserWithStats)
async def get_user_stats(
    user_id: int,
    db: aiosqlite.Connection = Depends(get_db)
):
    """
    Get user with complete statistics including streak, badges and
    latest wellness score.
    """
    user = await _get_user_or_404(db, user_id)

    store = ReportStore(db)
    gamification = GamificationService(store)

    streak = await gamification.get_streak_info(user_id)
    badges = await store.get_user_badges(user_id)
    total_reports = await store.count_user_health_reports(user_id)
    latest = await store.get_latest_health_report(user_id)

    return UserWithStats(
        **user.model_dump(),
        total_reports=total_reports,
        latest_wellness_score=latest.wellness_score if latest else None,
        wellness_level=get_wellness_level(latest.wellness_score) if latest else None,
        streak=streak,
        badges=[badge.badge_type for badge in badges]
    )


@router.get("/users", response_model=list[User])
async def list_users(
    db: aiosqlite.Connection = Depends(get_db)
):
    """List all users."""
    cursor = await db.execute(
        "SELECT id, email, first_name, last_name, created_at FROM users ORDER BY created_at DESC, id DESC"
    )
    rows = await cursor.fetchall()

    return [_row_to_user(row) for row in rows]


@router.delete("/users/{user_id}")
async def delete_user(
    user_id: int,
    db: aiosqlite.Connection = Depends(get_db)
):
    """
    Delete a user and all associated data.
    This includes reports, preferences and badges.
    """
    await _get_user_or_404(db, user_id)

    # Delete user (cascades to related tables)
    await db.execute("DELETE FROM users WHERE id = ?", (user_id,))
    await db.commit()

    logger.info(f"Deleted user {user_id}")

    return {"message": "User deleted successfully"}


@router.get("/users/{user_id}/badges", response_model=list[Badge])
async def get_user_badges(
    user_id: int,
    db: aiosqlite.Connection = Depends(get_db)
):
    """Badges earned by a user, most recent first."""
    await _get_user_or_404(db, user_id)
    return await ReportStore(db).get_user_badges(user_id)


async def _load_preferences(db: aiosqlite.Connection, user_id: int) -> UserPreferences:
    cursor = await db.execute(
        """SELECT dark_mode, language, notifications_enabled, auto_logout_minutes
           FROM user_preferences WHERE user_id = ?""",
        (user_id,)
    )
    row = await cursor.fetchone()

    if row is None:
        return UserPreferences(user_id=user_id)

    return UserPreferences(
        user_id=user_id,
        dark_mode=bool(row["dark_mode"]),
        language=row["language"],
        notifications_enabled=bool(row["notifications_enabled"]),
        auto_logout_minutes=row["auto_logout_minutes"]
    )


@router.get("/users/{user_id}/preferences", response_model=UserPreferences)
async def get_user_preferences(
    user_id: int,
    db: aiosqlite.Connection = Depends(get_db)
):
    """Get a user's preferences."""
    await _get_user_or_404(db, user_id)
    return await _load_preferences(db, user_id)


@router.put("/users/{user_id}/preferences", response_model=UserPreferences)
async def update_user_preferences(
    user_id: int,
    update: UserPreferencesUpdate,
    db: aiosqlite.Connection = Depends(get_db)
):
    """
    Create or update a user's preferences.
    Fields left out of the request keep their current value.
    """
    await _get_user_or_404(db, user_id)

    current = await _load_preferences(db, user_id)
    merged = current.model_copy(update=update.model_dump(exclude_none=True))

    await db.execute(
        """INSERT INTO user_preferences
           (user_id, dark_mode, language, notifications_enabled, auto_logout_minutes)
           VALUES (?, ?, ?, ?, ?)
           ON CONFLICT(user_id) DO UPDATE SET
           dark_mode = excluded.dark_mode,
           language = excluded.language,
           notifications_enabled = excluded.notifications_enabled,
           auto_logout_minutes = excluded.auto_logout_minutes""",
        (
            user_id,
            merged.dark_mode,
            merged.language,
            merged.notifications_enabled,
            merged.auto_logout_minutes
        )
    )
    await db.commit()

    logger.info(f"Updated preferences for user {user_id}")

    return merged
