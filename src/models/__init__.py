"""ORM models."""

from models.base import Base
from models.ratings import (
    LeaderboardEntryRow,
    PlayerMatchRating,
    RatingAuditRow,
    RatingSystem,
)

__all__ = [
    "Base",
    "LeaderboardEntryRow",
    "PlayerMatchRating",
    "RatingAuditRow",
    "RatingSystem",
]
