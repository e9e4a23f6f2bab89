"""Central repository definition for rating run output tables."""

from __future__ import annotations

from typing import Any

from domain.ratings.elo.player_calculator import PlayerRatingEvent
from domain.ratings.leaderboard import AuditEntry, LeaderboardEntry
from models.ratings import LeaderboardEntryRow, PlayerMatchRating, RatingAuditRow, RatingSystem
from repositories.ratings.base import BaseRatingRepository


def _event_to_row(event: PlayerRatingEvent, system_id: int) -> dict[str, Any]:
    return {
        "rating_system_id": system_id,
        "row_index": event.row_index,
        "match_id": event.match_id,
        "player_id": event.player_id,
        "team": event.team,
        "event_time": event.event_time,
        "won": event.won,
        "team_performance": event.team_performance,
        "expected_score": event.expected_score,
        "pre_rating": event.pre_rating,
        "rating_delta": event.rating_delta,
        "rounded_delta": event.rounded_delta,
        "post_rating": event.post_rating,
        "k_factor": event.k_factor,
        "performance_index": event.performance_index,
        "raw_performance": event.raw_performance,
        "performance_modifier": event.performance_modifier,
        "pre_uncertainty": event.pre_uncertainty,
        "post_uncertainty": event.post_uncertainty,
        "matches_played_pre": event.matches_played_pre,
    }


def _leaderboard_to_row(entry: LeaderboardEntry, system_id: int) -> dict[str, Any]:
    return {
        "rating_system_id": system_id,
        "rank": entry.rank,
        "player_id": entry.player_id,
        "rating": entry.rating,
        "raw_rating": entry.raw_rating,
        "matches_played": entry.matches_played,
        "uncertainty": entry.uncertainty,
        "last_match_date": entry.last_match_date,
    }


def _audit_to_row(entry: AuditEntry, position: int, system_id: int) -> dict[str, Any]:
    row = entry.row
    return {
        "rating_system_id": system_id,
        "position": position,
        "row_index": row.row_index,
        "match_id": row.match_id,
        "player_id": row.player_id,
        "team": row.team,
        "event_time": row.date,
        "map_name": row.map_name,
        "rounds_won": row.rounds_won,
        "rounds_lost": row.rounds_lost,
        "acs": row.acs,
        "kills": row.kills,
        "deaths": row.deaths,
        "assists": row.assists,
        "rating_delta": entry.rating_delta,
        "raw_values": list(row.raw_values),
    }


RATING_REPOSITORY: BaseRatingRepository[
    RatingSystem, PlayerRatingEvent, LeaderboardEntry, AuditEntry
] = BaseRatingRepository(
    system_model=RatingSystem,
    event_model=PlayerMatchRating,
    leaderboard_model=LeaderboardEntryRow,
    audit_model=RatingAuditRow,
    system_id_column="rating_system_id",
    entity_id_column="player_id",
    event_to_row=_event_to_row,
    leaderboard_to_row=_leaderboard_to_row,
    audit_to_row=_audit_to_row,
)
ensure_rating_schema = RATING_REPOSITORY.ensure_schema
