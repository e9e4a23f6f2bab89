"""Final leaderboard, per-row audit table and per-match delta history."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime

from domain.ratings.common import MatchParticipationRow, round_half_up
from domain.ratings.elo.player_calculator import PlayerRatingEvent
from domain.ratings.state import PlayerStateTable


@dataclass(frozen=True)
class LeaderboardEntry:
    rank: int
    player_id: str
    rating: int
    matches_played: int
    uncertainty: int
    last_match_date: datetime | None
    raw_rating: float


@dataclass(frozen=True)
class AuditEntry:
    row: MatchParticipationRow
    rating_delta: int | None

    @property
    def values(self) -> tuple[object, ...]:
        """Original cells followed by the delta ('' for rejected matches)."""
        delta: object = "" if self.rating_delta is None else self.rating_delta
        return (*self.row.raw_values, delta)


def build_leaderboard(states: PlayerStateTable) -> list[LeaderboardEntry]:
    """Rank every known player by rounded rating, ties by player id.

    The rating column is the starting rating plus the rounded deltas recorded
    in the audit table, so the two tables always reconcile.
    """
    base_rating = round_half_up(states.initial_rating)
    rows = [
        (player_id, base_rating + state.recorded_delta_total, state)
        for player_id, state in states.items()
    ]
    rows.sort(key=lambda item: (-item[1], item[0]))

    return [
        LeaderboardEntry(
            rank=index,
            player_id=player_id,
            rating=rating,
            matches_played=state.matches_played,
            uncertainty=round_half_up(state.uncertainty),
            last_match_date=state.last_match_date,
            raw_rating=round(state.rating, 2),
        )
        for index, (player_id, rating, state) in enumerate(rows, start=1)
    ]


def _audit_sort_key(entry: AuditEntry) -> tuple[object, ...]:
    row = entry.row
    # Rows with unparseable dates go last.
    date_key = (0, row.date) if row.date is not None else (1, datetime.min)
    return (
        date_key,
        str(row.match_id),
        row.round_count,
        row.team,
        -row.acs,
        -row.kills,
        row.row_index,
    )


def build_audit_table(
    rows: Iterable[MatchParticipationRow],
    deltas_by_row: Mapping[int, int],
) -> list[AuditEntry]:
    entries = [
        AuditEntry(row=row, rating_delta=deltas_by_row.get(row.row_index))
        for row in rows
    ]
    entries.sort(key=_audit_sort_key)
    return entries


def build_rating_history(events: Sequence[PlayerRatingEvent]) -> dict[str, dict[str, int]]:
    """player id -> {match id -> rounded delta}, in processing order."""
    history: dict[str, dict[str, int]] = {}
    for event in events:
        history.setdefault(event.player_id, {})[event.match_id] = event.rounded_delta
    return history


__all__ = [
    "AuditEntry",
    "LeaderboardEntry",
    "build_audit_table",
    "build_leaderboard",
    "build_rating_history",
]
