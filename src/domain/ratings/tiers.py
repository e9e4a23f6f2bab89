"""Display-only rating tiers for presenters; never feeds back into ratings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True)
class Tier:
    name: str
    min_rating: float | None
    background: str
    foreground: str


# Highest first; the last tier catches everything below.
DEFAULT_TIERS: Final[tuple[Tier, ...]] = (
    Tier(name="Radiant", min_rating=2000.0, background="#FF4655", foreground="#FFFFFF"),
    Tier(name="Immortal", min_rating=1800.0, background="#B784F7", foreground="#FFFFFF"),
    Tier(name="Diamond", min_rating=1600.0, background="#00B4D8", foreground="#FFFFFF"),
    Tier(name="Platinum", min_rating=1400.0, background="#A0A0A0", foreground="#FFFFFF"),
    Tier(name="Gold", min_rating=1200.0, background="#FFD700", foreground="#000000"),
    Tier(name="Silver", min_rating=1000.0, background="#C0C0C0", foreground="#000000"),
    Tier(name="Bronze", min_rating=None, background="#CD7F32", foreground="#FFFFFF"),
)


def tier_for_rating(rating: float, tiers: tuple[Tier, ...] = DEFAULT_TIERS) -> Tier:
    for tier in tiers:
        if tier.min_rating is None or rating >= tier.min_rating:
            return tier
    return tiers[-1]


__all__ = ["DEFAULT_TIERS", "Tier", "tier_for_rating"]
