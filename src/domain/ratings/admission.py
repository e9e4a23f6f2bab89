"""Admission gate run before a match is allowed to touch player state."""

from __future__ import annotations

from datetime import datetime

from domain.ratings.common import AdmittedMatch, MatchRecord, Team
from domain.ratings.errors import InvalidMatchDateError, MalformedMatchError

_VALID_TEAMS = frozenset(team.value for team in Team)


def admit_match(match: MatchRecord, *, team_size: int = 5) -> AdmittedMatch:
    """Validate one grouped match and split it into its two rosters.

    Raises MalformedMatchError for bad team labels, wrong roster sizes or a
    player listed twice, and InvalidMatchDateError when the match date is not
    a real calendar date.
    """
    for row in match.rows:
        if row.team not in _VALID_TEAMS:
            raise MalformedMatchError(
                match.match_id,
                f"match_id={match.match_id} has invalid team label {row.team!r} "
                f"for player {row.player_id!r}",
            )

    team_a = tuple(row for row in match.rows if row.team == Team.A.value)
    team_b = tuple(row for row in match.rows if row.team == Team.B.value)
    if len(team_a) != team_size or len(team_b) != team_size:
        raise MalformedMatchError(
            match.match_id,
            f"match_id={match.match_id} has incorrect number of players in each team "
            f"(team A: {len(team_a)}, team B: {len(team_b)}, expected {team_size})",
        )

    player_ids = [row.player_id for row in match.rows]
    if len(player_ids) != len(set(player_ids)):
        duplicates = sorted({player for player in player_ids if player_ids.count(player) > 1})
        raise MalformedMatchError(
            match.match_id,
            f"match_id={match.match_id} lists players more than once: {duplicates}",
        )

    match_date = match.match_date
    if not isinstance(match_date, datetime):
        raw = match.rows[0].raw_date if match.rows else None
        raise InvalidMatchDateError(
            match.match_id,
            f"match_id={match.match_id} has invalid date {raw!r}",
        )

    return AdmittedMatch(
        match_id=match.match_id,
        match_date=match_date,
        team_a=team_a,
        team_b=team_b,
    )


__all__ = ["admit_match"]
