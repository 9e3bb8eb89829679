import pytest
from pydantic import ValidationError

from config import Settings


def test_badge_history_window_defaults_to_thirty():
    assert Settings().badge_history_window == 30


def test_badge_history_window_below_thirty_is_rejected(monkeypatch):
    monkeypatch.setenv("BADGE_HISTORY_WINDOW", "10")
    with pytest.raises(ValidationError):
        Settings()


def test_database_path_strips_sqlite_scheme():
    settings = Settings(DATABASE_URL="sqlite:///tmp/reports.db")
    assert settings.database_path == "tmp/reports.db"
