"""Shared types for the match rating engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from math import floor


class Team(str, Enum):
    """Side label of a participation row."""

    A = "A"
    B = "B"


@dataclass(frozen=True)
class ColumnMapping:
    """Header names of the input table; the contract with whoever exports it."""

    date: str = "Date"
    match_id: str = "MatchID"
    map_name: str = "Map"
    player_id: str = "Player"
    team: str = "Team"
    rounds_won: str = "RoundsWon"
    rounds_lost: str = "RoundsLost"
    acs: str = "ACS"
    kills: str = "Kills"
    deaths: str = "Deaths"
    assists: str = "Assists"

    def required(self) -> tuple[str, ...]:
        return (
            self.date,
            self.match_id,
            self.player_id,
            self.team,
            self.rounds_won,
            self.rounds_lost,
            self.acs,
            self.kills,
            self.deaths,
            self.assists,
        )


@dataclass(frozen=True)
class MatchParticipationRow:
    """One player's line in one match, as read from the input table."""

    row_index: int
    match_id: str
    date: datetime | None
    player_id: str
    team: str
    rounds_won: int = 0
    rounds_lost: int = 0
    acs: float = 0.0
    kills: int = 0
    deaths: int = 0
    assists: int = 0
    map_name: str | None = None
    raw_date: str | None = None
    raw_values: tuple[str, ...] = field(default=(), compare=False)

    @property
    def round_count(self) -> int:
        return self.rounds_won + self.rounds_lost


@dataclass(frozen=True)
class MatchRecord:
    """All rows sharing one match id, in input order."""

    match_id: str
    rows: tuple[MatchParticipationRow, ...]

    @property
    def match_date(self) -> datetime | None:
        if not self.rows:
            return None
        return self.rows[0].date


@dataclass(frozen=True)
class AdmittedMatch:
    """A match that passed admission: exactly one full roster per side."""

    match_id: str
    match_date: datetime
    team_a: tuple[MatchParticipationRow, ...]
    team_b: tuple[MatchParticipationRow, ...]

    @property
    def rows(self) -> tuple[MatchParticipationRow, ...]:
        return self.team_a + self.team_b

    @property
    def margin_a(self) -> int:
        """Round margin of team A, read from team A's first row."""
        anchor = self.team_a[0]
        return anchor.rounds_won - anchor.rounds_lost


@dataclass(frozen=True)
class SkippedMatch:
    match_id: str
    reason: str


def round_half_up(value: float) -> int:
    """Round to the nearest integer with .5 going up (spreadsheet semantics)."""
    return int(floor(value + 0.5))


__all__ = [
    "AdmittedMatch",
    "ColumnMapping",
    "MatchParticipationRow",
    "MatchRecord",
    "SkippedMatch",
    "Team",
    "round_half_up",
]
