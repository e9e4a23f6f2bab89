"""End-to-end tests for a batch rating run."""

from __future__ import annotations

from collections import defaultdict
from datetime import datetime, timedelta

import pytest

from domain.pipeline import run_rating_batch
from domain.ratings.common import MatchParticipationRow
from domain.ratings.errors import MissingInputError

HEADER = ("Date", "MatchID", "Player", "Team", "RoundsWon", "RoundsLost", "ACS", "Kills", "Deaths", "Assists")
START = datetime(2026, 1, 5, 20, 0)


def _match_rows(
    start_index: int,
    match_id: str,
    team_a: list[str],
    team_b: list[str],
    *,
    rounds: tuple[int, int] = (13, 4),
    date: datetime | None = START,
    acs: dict[str, float] | None = None,
) -> list[MatchParticipationRow]:
    rows: list[MatchParticipationRow] = []
    for team, players in (("A", team_a), ("B", team_b)):
        won, lost = rounds if team == "A" else (rounds[1], rounds[0])
        for player_id in players:
            player_acs = (acs or {}).get(player_id, 200.0)
            raw_date = "2026-02-30" if date is None else date.strftime("%Y-%m-%d %H:%M")
            rows.append(
                MatchParticipationRow(
                    row_index=start_index + len(rows),
                    match_id=match_id,
                    date=date,
                    player_id=player_id,
                    team=team,
                    rounds_won=won,
                    rounds_lost=lost,
                    acs=player_acs,
                    kills=15,
                    deaths=15,
                    assists=5,
                    raw_date=raw_date,
                    raw_values=(
                        raw_date,
                        match_id,
                        player_id,
                        team,
                        str(won),
                        str(lost),
                        str(player_acs),
                        "15",
                        "15",
                        "5",
                    ),
                )
            )
    return rows


def _league() -> list[MatchParticipationRow]:
    pool = [f"p{index:02d}" for index in range(14)]
    rows: list[MatchParticipationRow] = []
    for match_number in range(1, 9):
        rotated = pool[match_number:] + pool[:match_number]
        rows.extend(
            _match_rows(
                len(rows),
                str(match_number),
                rotated[:5],
                rotated[5:10],
                rounds=(13, match_number % 12),
                date=START + timedelta(days=match_number * 2),
                acs={rotated[0]: 320.0, rotated[6]: 90.0, rotated[3]: 260.0},
            )
        )
    return rows


def test_single_blowout_gives_expected_leaderboard() -> None:
    team_a = ["a1", "a2", "a3", "a4", "a5"]
    team_b = ["b1", "b2", "b3", "b4", "b5"]
    result = run_rating_batch(_match_rows(0, "1", team_a, team_b), header=HEADER)

    ratings = {entry.player_id: entry.rating for entry in result.leaderboard}
    assert all(ratings[player] == 1531 for player in team_a)
    assert all(ratings[player] == 1469 for player in team_b)
    assert [entry.player_id for entry in result.leaderboard[:5]] == team_a
    assert all(entry.matches_played == 1 for entry in result.leaderboard)
    assert all(entry.uncertainty == 170 for entry in result.leaderboard)
    assert [entry.rating_delta for entry in result.audit] == [31] * 5 + [-31] * 5
    assert result.processed_matches == 1


def test_leaderboard_equals_initial_plus_audited_deltas() -> None:
    result = run_rating_batch(_league(), header=HEADER)

    audited: dict[str, int] = defaultdict(int)
    for entry in result.audit:
        if entry.rating_delta is not None:
            audited[entry.row.player_id] += entry.rating_delta

    assert result.leaderboard
    for entry in result.leaderboard:
        assert entry.rating == 1500 + audited[entry.player_id]
        assert entry.raw_rating == pytest.approx(entry.rating, abs=0.5 * entry.matches_played + 0.01)


def test_team_movement_is_k_weighted_base_change() -> None:
    result = run_rating_batch(_league())

    per_team: dict[tuple[str, str], list] = defaultdict(list)
    for event in result.events:
        per_team[(event.match_id, event.team)].append(event)
    for events in per_team.values():
        assert len(events) == 5
        base_change = events[0].team_performance - events[0].expected_score
        total_k = sum(event.k_factor for event in events)
        assert sum(event.rating_delta for event in events) == pytest.approx(total_k * base_change)


def test_first_match_is_zero_sum() -> None:
    result = run_rating_batch(_league())

    first_match = [event for event in result.events if event.match_id == "1"]
    assert sum(event.rating_delta for event in first_match) == pytest.approx(0.0, abs=1e-9)


def test_uncertainty_and_k_stay_in_bounds() -> None:
    result = run_rating_batch(_league())

    for event in result.events:
        assert 50.0 <= event.pre_uncertainty <= 200.0
        assert 50.0 <= event.post_uncertainty <= 200.0
        assert 16.0 <= event.k_factor <= 64.0
        assert 0.0 < event.team_performance < 1.0


def test_runs_are_deterministic() -> None:
    first = run_rating_batch(_league(), header=HEADER)
    second = run_rating_batch(_league(), header=HEADER)

    assert first.leaderboard == second.leaderboard
    assert [entry.values for entry in first.audit] == [entry.values for entry in second.audit]


def test_input_row_order_does_not_change_results() -> None:
    rows = _league()
    forward = run_rating_batch(rows)
    backward = run_rating_batch(list(reversed(rows)))

    assert [entry.player_id for entry in forward.leaderboard] == [
        entry.player_id for entry in backward.leaderboard
    ]
    forward_ratings = {entry.player_id: entry.raw_rating for entry in forward.leaderboard}
    for entry in backward.leaderboard:
        assert entry.raw_rating == pytest.approx(forward_ratings[entry.player_id])


def test_malformed_match_is_skipped_without_touching_state() -> None:
    good = _match_rows(0, "1", ["a1", "a2", "a3", "a4", "a5"], ["b1", "b2", "b3", "b4", "b5"])
    bad = _match_rows(
        10,
        "2",
        ["a1", "a2", "a3", "a4", "a5", "x1"],
        ["b1", "b2", "b3", "x2"],
        date=START + timedelta(days=1),
    )
    result = run_rating_batch(good + bad)

    assert [skipped.match_id for skipped in result.skipped_matches] == ["2"]
    assert "team A: 6, team B: 4" in result.skipped_matches[0].reason
    assert result.processed_matches == 1

    players = {entry.player_id for entry in result.leaderboard}
    assert "x1" not in players and "x2" not in players
    assert all(entry.matches_played == 1 for entry in result.leaderboard)

    rejected = [entry for entry in result.audit if entry.row.match_id == "2"]
    assert len(rejected) == 10
    assert all(entry.rating_delta is None for entry in rejected)
    assert all(entry.values[-1] == "" for entry in rejected)


def test_invalid_date_match_is_skipped() -> None:
    good = _match_rows(0, "1", ["a1", "a2", "a3", "a4", "a5"], ["b1", "b2", "b3", "b4", "b5"])
    undated = _match_rows(10, "2", ["c1", "c2", "c3", "c4", "c5"], ["d1", "d2", "d3", "d4", "d5"], date=None)
    result = run_rating_batch(good + undated)

    assert [skipped.match_id for skipped in result.skipped_matches] == ["2"]
    assert len(result.leaderboard) == 10
    assert result.audit[-1].row.match_id == "2"


def test_empty_input_raises_missing_input() -> None:
    with pytest.raises(MissingInputError, match="No match data rows found"):
        run_rating_batch([])


def test_rating_history_records_rounded_deltas_per_match() -> None:
    result = run_rating_batch(_league())

    assert result.match_ids == [str(number) for number in range(1, 9)]
    for event in result.events:
        assert result.rating_history[event.player_id][event.match_id] == event.rounded_delta
