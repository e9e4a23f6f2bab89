"""Tests for leaderboard ranking, audit ordering and display tiers."""

from __future__ import annotations

from datetime import datetime

import pytest

from domain.ratings.common import MatchParticipationRow
from domain.ratings.leaderboard import build_audit_table, build_leaderboard
from domain.ratings.state import PlayerStateTable
from domain.ratings.tiers import DEFAULT_TIERS, tier_for_rating


def _table() -> PlayerStateTable:
    return PlayerStateTable(initial_rating=1500.0, initial_uncertainty=200.0)


def _row(
    index: int,
    *,
    match_id: str,
    date: datetime | None,
    team: str = "A",
    acs: float = 200.0,
    kills: int = 10,
) -> MatchParticipationRow:
    return MatchParticipationRow(
        row_index=index,
        match_id=match_id,
        date=date,
        player_id=f"p{index}",
        team=team,
        rounds_won=13,
        rounds_lost=7,
        acs=acs,
        kills=kills,
        raw_values=(match_id, f"p{index}"),
    )


def test_leaderboard_sorts_by_rating_then_player_id() -> None:
    states = _table()
    for player_id, delta in [("carol", 12), ("bob", 31), ("alice", 12), ("dave", -20)]:
        state = states.get_or_create(player_id)
        state.rating += delta
        state.recorded_delta_total = delta
        state.matches_played = 1

    leaderboard = build_leaderboard(states)

    assert [entry.player_id for entry in leaderboard] == ["bob", "alice", "carol", "dave"]
    assert [entry.rank for entry in leaderboard] == [1, 2, 3, 4]
    assert [entry.rating for entry in leaderboard] == [1531, 1512, 1512, 1480]


def test_leaderboard_rating_reconciles_with_rounded_deltas() -> None:
    states = _table()
    state = states.get_or_create("p")
    # Three +0.5 deltas round up individually but the raw sum is 1501.5.
    state.rating = 1501.5
    state.recorded_delta_total = 3
    state.uncertainty = 144.5

    entry = build_leaderboard(states)[0]
    assert entry.rating == 1503
    assert entry.raw_rating == pytest.approx(1501.5)
    assert entry.uncertainty == 145


def test_empty_state_table_gives_empty_leaderboard() -> None:
    assert build_leaderboard(_table()) == []


def test_audit_table_orders_rows_and_blanks_rejected_deltas() -> None:
    early = datetime(2026, 1, 1)
    late = datetime(2026, 1, 2)
    rows = [
        _row(0, match_id="2", date=late, acs=150.0),
        _row(1, match_id="2", date=late, acs=250.0),
        _row(2, match_id="1", date=early, team="B"),
        _row(3, match_id="1", date=early, team="A"),
        _row(4, match_id="3", date=None),
    ]
    entries = build_audit_table(rows, {0: -4, 1: 7, 2: 0, 3: 3})

    assert [entry.row.row_index for entry in entries] == [3, 2, 1, 0, 4]
    assert entries[-1].rating_delta is None
    assert entries[-1].values == ("3", "p4", "")
    assert entries[0].values == ("1", "p3", 3)
    assert entries[1].rating_delta == 0


def test_audit_ties_break_on_kills_then_input_order() -> None:
    date = datetime(2026, 1, 1)
    rows = [
        _row(0, match_id="1", date=date, kills=5),
        _row(1, match_id="1", date=date, kills=9),
        _row(2, match_id="1", date=date, kills=9),
    ]
    entries = build_audit_table(rows, {})
    assert [entry.row.row_index for entry in entries] == [1, 2, 0]


@pytest.mark.parametrize(
    ("rating", "expected"),
    [
        (2400, "Radiant"),
        (2000, "Radiant"),
        (1999, "Immortal"),
        (1650, "Diamond"),
        (1500, "Platinum"),
        (1200, "Gold"),
        (1000, "Silver"),
        (640, "Bronze"),
    ],
)
def test_tier_for_rating(rating: int, expected: str) -> None:
    assert tier_for_rating(rating).name == expected


def test_default_tiers_are_descending() -> None:
    thresholds = [tier.min_rating for tier in DEFAULT_TIERS if tier.min_rating is not None]
    assert thresholds == sorted(thresholds, reverse=True)
    assert DEFAULT_TIERS[-1].min_rating is None
