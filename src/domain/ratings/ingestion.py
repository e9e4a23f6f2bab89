"""Group flat participation rows into matches ordered by match id."""

from __future__ import annotations

from collections.abc import Iterable
from math import isfinite

from domain.ratings.common import MatchParticipationRow, MatchRecord


def match_sort_key(match_id: str) -> tuple[int, float, str]:
    """Numeric ordering for match ids.

    Ids that do not parse as numbers sort after every numeric id, among
    themselves by plain string order.
    """
    try:
        numeric = float(match_id)
    except (TypeError, ValueError):
        return (1, 0.0, str(match_id))
    if not isfinite(numeric):
        return (1, 0.0, str(match_id))
    return (0, numeric, str(match_id))


def group_matches(rows: Iterable[MatchParticipationRow]) -> list[MatchRecord]:
    """Group rows by match id, keeping input order inside each match."""
    grouped: dict[str, list[MatchParticipationRow]] = {}
    for row in rows:
        grouped.setdefault(row.match_id, []).append(row)

    return [
        MatchRecord(match_id=match_id, rows=tuple(grouped[match_id]))
        for match_id in sorted(grouped, key=match_sort_key)
    ]


__all__ = ["group_matches", "match_sort_key"]
