# =============================================================================
# HEALTH MONITOR BACKEND - DATABASE CONNECTION
# =============================================================================
"""
Async SQLite database connection management using aiosqlite.
"""

import aiosqlite
from pathlib import Path
from typing import AsyncGenerator

from config import get_settings

# Global connection reference
_connection: aiosqlite.Connection | None = None


def get_database_path() -> Path:
    """Resolve the database file from the configured sqlite URL."""
    return Path(get_settings().database_path)


async def get_connection() -> aiosqlite.Connection:
    """Get or create database connection."""
    global _connection
    if _connection is None:
        database_path = get_database_path()
        # Ensure data directory exists
        database_path.parent.mkdir(parents=True, exist_ok=True)
        _connection = await aiosqlite.connect(database_path)
        _connection.row_factory = aiosqlite.Row
        await _connection.execute("PRAGMA foreign_keys = ON")
    return _connection


async def get_db() -> AsyncGenerator[aiosqlite.Connection, None]:
    """
    Dependency injection for database connection.
    Usage: db: aiosqlite.Connection = Depends(get_db)
    """
    conn = await get_connection()
    try:
        yield conn
    finally:
        pass  # Connection is managed by lifespan


async def init_database() -> None:
    """
    Initialize database schema.
    Creates all tables if they don't exist.
    """
    conn = await get_connection()

    # Users table
    await conn.execute("""
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            email TEXT NOT NULL UNIQUE,
            first_name TEXT NOT NULL,
            last_name TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    """)

    # Health reports - write-once, one per completed scan
    await conn.execute("""
        CREATE TABLE IF NOT EXISTS health_reports (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id INTEGER NOT NULL,
            wellness_score INTEGER NOT NULL,
            heart_rate INTEGER NOT NULL,
            oxygen_level INTEGER NOT NULL,
            blood_sugar INTEGER NOT NULL,
            stress_level TEXT NOT NULL,
            energy_level TEXT NOT NULL,
            detected_mood TEXT NOT NULL,
            mood_confidence INTEGER NOT NULL,
            face_image_encrypted BLOB,
            face_image_type TEXT,
            iv BLOB,
            tag BLOB,
            scan_duration INTEGER NOT NULL DEFAULT 10,
            created_at TIMESTAMP NOT NULL,
            FOREIGN KEY (user_id) REFERENCES users (id) ON DELETE CASCADE
        )
    """)

    # Per-user preferences
    await conn.execute("""
        CREATE TABLE IF NOT EXISTS user_preferences (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id INTEGER NOT NULL UNIQUE,
            dark_mode BOOLEAN DEFAULT 0,
            language TEXT DEFAULT 'en',
            notifications_enabled BOOLEAN DEFAULT 1,
            auto_logout_minutes INTEGER DEFAULT 10,
            FOREIGN KEY (user_id) REFERENCES users (id) ON DELETE CASCADE
        )
    """)

    # Badge achievements
    await conn.execute("""
        CREATE TABLE IF NOT EXISTS health_badges (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            user_id INTEGER NOT NULL,
            badge_type TEXT NOT NULL,
            earned_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            FOREIGN KEY (user_id) REFERENCES users (id) ON DELETE CASCADE,
            UNIQUE(user_id, badge_type)
        )
    """)

    # Create indexes for performance
    await conn.execute(
        "CREATE INDEX IF NOT EXISTS idx_health_reports_user_created "
        "ON health_reports(user_id, created_at)"
    )

    await conn.commit()


async def close_database() -> None:
    """Close database connection."""
    global _connection
    if _connection:
        await _connection.close()
        _connection = None
