import random
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from config import get_settings


@pytest.fixture
def database_url(tmp_path, monkeypatch):
    """Point the app at a fresh SQLite file for each test."""
    url = f"sqlite:///{tmp_path / 'health_monitor.db'}"
    monkeypatch.setenv("DATABASE_URL", url)
    monkeypatch.setenv("ENCRYPTION_KEY", "test-key-for-face-snapshots-0123456789")
    get_settings.cache_clear()
    yield url
    get_settings.cache_clear()


@pytest.fixture
async def db(database_url):
    from database.connection import close_database, get_connection, init_database

    await init_database()
    conn = await get_connection()
    yield conn
    await close_database()


@pytest.fixture
async def user_id(db):
    cursor = await db.execute(
        "INSERT INTO users (email, first_name, last_name) VALUES (?, ?, ?)",
        ("ada@example.com", "Ada", "Lovelace")
    )
    await db.commit()
    return cursor.lastrowid


@pytest.fixture
def client(database_url):
    from main import app

    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def seeded_rng():
    return random.Random(1234)


class FakeReport:
    """Minimal report shape for the pure badge rules."""

    def __init__(self, created_at: datetime, wellness_score: int = 75):
        self.created_at = created_at
        self.wellness_score = wellness_score

    def __repr__(self):
        return f"FakeReport({self.created_at:%Y-%m-%d %H:%M}, {self.wellness_score})"


@pytest.fixture
def make_history():
    """Build a newest-first history from (created_at, score) pairs given oldest first."""
    def _make(entries):
        reports = [FakeReport(created_at, score) for created_at, score in entries]
        return list(reversed(reports))
    return _make
