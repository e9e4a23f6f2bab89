"""rating_audit table model."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Float, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base
from models.ratings.mixins import ParticipationMixin, RatingRunRowMixin


class RatingAuditRow(ParticipationMixin, RatingRunRowMixin, Base):
    """Every input row of a run plus its rounded delta (null when the match was skipped)."""

    __tablename__ = "rating_audit"
    __table_args__ = (
        Index("idx_rating_audit_system_position", "rating_system_id", "position"),
        Index("idx_rating_audit_match", "match_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    event_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=False), nullable=True)
    map_name: Mapped[str | None] = mapped_column(String(64), nullable=True)
    rounds_won: Mapped[int] = mapped_column(Integer, nullable=False)
    rounds_lost: Mapped[int] = mapped_column(Integer, nullable=False)
    acs: Mapped[float] = mapped_column(Float, nullable=False)
    kills: Mapped[int] = mapped_column(Integer, nullable=False)
    deaths: Mapped[int] = mapped_column(Integer, nullable=False)
    assists: Mapped[int] = mapped_column(Integer, nullable=False)
    rating_delta: Mapped[int | None] = mapped_column(Integer, nullable=True)
    raw_values: Mapped[list[Any]] = mapped_column(JSON, nullable=False)
