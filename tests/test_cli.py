import json
from pathlib import Path

import pytest

from pyffa.cli import main
from pyffa.export import RECOMMENDATION_HEADERS


PLAYERS_CSV = """player_id,name,position,team,injury_status,active
1,Patrick Mahomes,QB,Kansas City Chiefs,,1
2,Travis Kelce,TE,KC,Questionable,1
"""

SAMPLES_CSV = """game_id,player_id,opponent,game_date,fantasy_points,rating,season,week
g1,1,Buffalo Bills,2023-10-01,20,,2023,4
g2,1,BUF,2024-09-08,25,,2024,1
g3,1,DEN,2024-09-15,27,,2024,2
g4,2,LV,2024-09-08,10,,2024,1
g5,2,LV,2024-09-15,12,,2024,2
"""


@pytest.fixture
def db_path(tmp_path: Path, capsys) -> Path:
    players = tmp_path / "players.csv"
    samples = tmp_path / "samples.csv"
    players.write_text(PLAYERS_CSV)
    samples.write_text(SAMPLES_CSV)
    db = tmp_path / "cli.sqlite"

    main(["--db", str(db), "import", "--players", str(players), "--samples", str(samples)])

    out = capsys.readouterr().out
    assert "Imported 2 players" in out
    assert "Imported 5 game samples" in out
    return db


def _run(db: Path, *args: str) -> None:
    main(["--db", str(db), "--season", "2024", *args])


def test_search_and_history(db_path: Path, capsys):
    _run(db_path, "search", "kelce")
    out = capsys.readouterr().out
    assert "Travis Kelce (TE, KC)" in out

    _run(db_path, "search", "mahomes", "--limit", "1")
    assert capsys.readouterr().out.splitlines() == [" 25  Patrick Mahomes (QB, KC)  [contains_name]"]

    _run(db_path, "history")
    assert capsys.readouterr().out.splitlines() == ["mahomes", "kelce"]

    _run(db_path, "history", "--clear")
    assert "cleared" in capsys.readouterr().out
    _run(db_path, "history")
    assert capsys.readouterr().out == ""


def test_suggest(db_path: Path, capsys):
    _run(db_path, "suggest", "pat")
    assert capsys.readouterr().out.splitlines() == ["Patrick Mahomes", "Patrick"]


def test_matchup_prints_json(db_path: Path, capsys):
    _run(db_path, "matchup", "1", "BUF")
    payload = json.loads(capsys.readouterr().out)
    assert payload["player_name"] == "Patrick Mahomes"
    assert payload["sample_size"] == 2
    assert payload["average_fantasy_points"] == pytest.approx(22.5)
    assert [game["fantasy_points"] for game in payload["historical_games"]] == [25, 20]


def test_project_and_season_average(db_path: Path, capsys):
    _run(db_path, "season-average", "1", "2024")
    assert capsys.readouterr().out.strip() == "26.00"

    _run(db_path, "project", "1", "NE")
    assert capsys.readouterr().out.strip() == "26.00"


def test_recommend_reports_skipped_players(db_path: Path, capsys):
    _run(db_path, "recommend", "2", "1", "ghost")
    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith(" 1. Patrick Mahomes")
    assert lines[1].startswith(" 2. Travis Kelce")
    assert lines[-1] == "Skipped 1 player(s) that could not be loaded"


def test_recommend_writes_csv(db_path: Path, tmp_path: Path, capsys):
    output = tmp_path / "recs.csv"
    _run(db_path, "recommend", "1", "2", "--output", str(output))

    assert "Wrote 2 recommendations" in capsys.readouterr().out
    header = output.read_text().splitlines()[0]
    assert header == ",".join(RECOMMENDATION_HEADERS)


def test_import_with_profile(tmp_path: Path, capsys):
    players = tmp_path / "players.csv"
    players.write_text("Id,First,Last,Pos,Team\n9,Josh,Allen,QB,Buffalo\n")
    profile = tmp_path / "profile.json"
    db = tmp_path / "profile.sqlite"

    main([
        "--db", str(db), "import",
        "--players", str(players),
        "--players-column", "player_id=Id",
        "--players-column", "name=First|Last",
        "--players-column", "position=Pos",
        "--players-column", "team=Team",
        "--save-profile", str(profile),
    ])
    assert "Imported 1 players" in capsys.readouterr().out

    _run(db, "search", "josh allen")
    assert "Josh Allen (QB, BUF)" in capsys.readouterr().out

    saved = json.loads(profile.read_text())
    assert saved["players_mapping"]["name"] == "First|Last"


def test_import_rejects_malformed_mapping(tmp_path: Path):
    with pytest.raises(ValueError, match="expected key=value"):
        main(["--db", str(tmp_path / "x.sqlite"), "import", "--players-column", "name"])
