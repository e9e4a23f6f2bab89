"""player_match_ratings table model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, Float, Index, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base
from models.ratings.mixins import ParticipationMixin, RatingRunRowMixin


class PlayerMatchRating(ParticipationMixin, RatingRunRowMixin, Base):
    """Historical player rating events (one row per player per admitted match)."""

    __tablename__ = "player_match_ratings"
    __table_args__ = (
        UniqueConstraint(
            "rating_system_id",
            "player_id",
            "match_id",
            name="uq_player_match_ratings_system_player_match",
        ),
        CheckConstraint(
            "expected_score >= 0.0 AND expected_score <= 1.0",
            name="ck_player_match_ratings_expected_score",
        ),
        CheckConstraint(
            "team_performance >= 0.0 AND team_performance <= 1.0",
            name="ck_player_match_ratings_team_performance",
        ),
        Index("idx_player_match_ratings_system", "rating_system_id"),
        Index(
            "idx_player_match_ratings_system_player_event",
            "rating_system_id",
            "player_id",
            "event_time",
        ),
        Index("idx_player_match_ratings_match", "match_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    event_time: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
    won: Mapped[bool] = mapped_column(Boolean, nullable=False)
    team_performance: Mapped[float] = mapped_column(Float, nullable=False)
    expected_score: Mapped[float] = mapped_column(Float, nullable=False)
    pre_rating: Mapped[float] = mapped_column(Float, nullable=False)
    rating_delta: Mapped[float] = mapped_column(Float, nullable=False)
    rounded_delta: Mapped[int] = mapped_column(Integer, nullable=False)
    post_rating: Mapped[float] = mapped_column(Float, nullable=False)
    k_factor: Mapped[float] = mapped_column(Float, nullable=False)
    performance_index: Mapped[float] = mapped_column(Float, nullable=False)
    raw_performance: Mapped[float] = mapped_column(Float, nullable=False)
    performance_modifier: Mapped[float] = mapped_column(Float, nullable=False)
    pre_uncertainty: Mapped[float] = mapped_column(Float, nullable=False)
    post_uncertainty: Mapped[float] = mapped_column(Float, nullable=False)
    matches_played_pre: Mapped[int] = mapped_column(Integer, nullable=False)
