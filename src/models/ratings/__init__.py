"""Rating ORM models."""

from models.ratings.audit import RatingAuditRow
from models.ratings.leaderboard import LeaderboardEntryRow
from models.ratings.player_event import PlayerMatchRating
from models.ratings.system import RatingSystem

__all__ = [
    "LeaderboardEntryRow",
    "PlayerMatchRating",
    "RatingAuditRow",
    "RatingSystem",
]
