from pathlib import Path

from pyffa.config import ColumnProfile, Settings, load_settings


def test_defaults(monkeypatch):
    for name in (
        "PYFFA_CURRENT_SEASON",
        "PYFFA_MAX_WORKERS",
        "PYFFA_DB_PATH",
        "PYFFA_MAX_SUGGESTIONS",
        "PYFFA_HISTORY_SIZE",
        "PYFFA_RECENT_SIZE",
    ):
        monkeypatch.delenv(name, raising=False)

    assert load_settings() == Settings()


def test_environment_overrides(monkeypatch, tmp_path: Path):
    monkeypatch.setenv("PYFFA_CURRENT_SEASON", "2025")
    monkeypatch.setenv("PYFFA_MAX_WORKERS", "0")
    monkeypatch.setenv("PYFFA_DB_PATH", str(tmp_path / "custom.sqlite"))
    monkeypatch.setenv("PYFFA_MAX_SUGGESTIONS", "not-a-number")

    settings = load_settings()

    assert settings.current_season == 2025
    assert settings.max_workers == 1
    assert settings.db_path == tmp_path / "custom.sqlite"
    assert settings.max_suggestions == 5


def test_column_profile_round_trip(tmp_path: Path):
    path = tmp_path / "profile.json"
    ColumnProfile({"name": "First Name|Last Name"}, {"opponent_team": "opp"}).save(path)

    profile = ColumnProfile.load(path)

    assert profile.players_mapping == {"name": "First Name|Last Name"}
    assert profile.samples_mapping == {"opponent_team": "opp"}
