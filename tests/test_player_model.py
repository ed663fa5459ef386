from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from pyffa.models import MatchupSample, PlayerRecord


def test_player_record_is_frozen():
    record = PlayerRecord(
        player_id="p1",
        name="Test Player",
        position="QB",
        team="KC",
    )

    assert record.player_id == "p1"
    assert record.is_active is True
    assert record.injury_status is None

    with pytest.raises((TypeError, ValidationError)):
        record.player_id = "p2"  # type: ignore[attr-defined]


def test_player_record_requires_identifier():
    with pytest.raises(ValidationError):
        PlayerRecord(player_id="", name="Nobody", position="WR", team="KC")


def test_matchup_sample_rejects_out_of_range_week():
    with pytest.raises(ValidationError):
        MatchupSample(
            sample_id="s1",
            player_id="p1",
            opponent_team="BUF",
            game_date=datetime(2023, 9, 10, tzinfo=timezone.utc),
            fantasy_points=12.0,
            season=2023,
            week=0,
        )
