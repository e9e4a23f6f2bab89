"""leaderboard_entries table model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Float, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base
from models.ratings.mixins import RatingRunRowMixin


class LeaderboardEntryRow(RatingRunRowMixin, Base):
    """Final standings of one rating run (one row per player)."""

    __tablename__ = "leaderboard_entries"
    __table_args__ = (
        UniqueConstraint("rating_system_id", "player_id", name="uq_leaderboard_entries_system_player"),
        Index("idx_leaderboard_entries_system_rank", "rating_system_id", "rank"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    rank: Mapped[int] = mapped_column(Integer, nullable=False)
    player_id: Mapped[str] = mapped_column(String(128), nullable=False)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    raw_rating: Mapped[float] = mapped_column(Float, nullable=False)
    matches_played: Mapped[int] = mapped_column(Integer, nullable=False)
    uncertainty: Mapped[int] = mapped_column(Integer, nullable=False)
    last_match_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=False), nullable=True)
