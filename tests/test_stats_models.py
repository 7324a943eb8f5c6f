"""Tests for normalizing FACEIT payloads."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from cs2intel.stats.models import (
    FaceitPlayer,
    FaceitStatsResponse,
    MapStatRecord,
    PlayerStats,
)


def _segment(label, matches, wins, rate, type_="Map"):
    return {
        "label": label,
        "type": type_,
        "mode": "5v5",
        "stats": {"Matches": str(matches), "Wins": str(wins), "Win Rate %": str(rate)},
    }


def _player(**games):
    return FaceitPlayer.model_validate(
        {"player_id": "p1", "nickname": "ropz", "games": games}
    )


def test_non_map_segments_are_dropped_and_maps_sorted():
    response = FaceitStatsResponse.model_validate(
        {
            "player_id": "p1",
            "lifetime": {"Matches": "300", "Win Rate %": "52", "Average K/D Ratio": "1.31"},
            "segments": [
                _segment("Mirage", 20, 10, 50),
                _segment("5v5", 300, 156, 52, type_="Mode"),
                _segment("Premier 5v5", 10, 5, 50),
                _segment("Ancient", 80, 44, 55),
                _segment("", 3, 1, 33),
            ],
        }
    )

    stats = PlayerStats.from_faceit(
        _player(cs2={"skill_level": 10, "faceit_elo": 2450}), response
    )

    assert [record.map for record in stats.map_stats] == ["Ancient", "Mirage"]
    assert stats.skill_level == 10
    assert stats.elo == 2450
    assert stats.total_matches == 300
    assert stats.overall_win_rate == 52.0
    assert stats.kd_ratio == pytest.approx(1.31)


def test_upstream_win_rate_is_kept_verbatim():
    record = MapStatRecord.from_segment(
        FaceitStatsResponse.model_validate(
            {"player_id": "p1", "segments": [_segment("Nuke", 3, 1, 34)]}
        ).segments[0]
    )
    assert record.win_rate == 34.0
    assert record.wins == 1


def test_duplicate_map_labels_keep_the_larger_sample():
    response = FaceitStatsResponse.model_validate(
        {
            "player_id": "p1",
            "segments": [_segment("Dust2", 4, 2, 50), _segment("Dust2", 40, 30, 75)],
        }
    )
    stats = PlayerStats.from_faceit(_player(), response)
    assert len(stats.map_stats) == 1
    assert stats.map_stats[0].matches == 40


def test_missing_cs2_profile_defaults_to_zero():
    response = FaceitStatsResponse.model_validate({"player_id": "p1"})
    stats = PlayerStats.from_faceit(_player(), response)
    assert stats.elo == 0
    assert stats.skill_level == 0
    assert stats.kd_ratio is None
    assert stats.map_stats == []


def test_wins_cannot_exceed_matches():
    with pytest.raises(ValidationError):
        MapStatRecord(map="Nuke", matches=3, wins=4, win_rate=100)


def test_negative_matches_are_rejected():
    with pytest.raises(ValidationError):
        MapStatRecord(map="Nuke", matches=-1, wins=0, win_rate=0)
