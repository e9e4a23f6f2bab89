"""rating_systems table model."""

from __future__ import annotations

from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base
from models.ratings.mixins import RatingSystemMixin


class RatingSystem(RatingSystemMixin, Base):
    """Configuration metadata for one configured rating run."""

    __tablename__ = "rating_systems"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
