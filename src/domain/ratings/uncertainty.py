"""Glicko-style rating uncertainty: grows while idle, shrinks with every match."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from math import sqrt


@dataclass(frozen=True)
class UncertaintyParameters:
    min_uncertainty: float = 50.0
    max_uncertainty: float = 200.0
    initial_uncertainty: float = 200.0
    idle_growth: float = 20.0
    decay: float = 0.85


def idle_days(match_date: datetime, last_match_date: datetime | None) -> float:
    if last_match_date is None:
        return 0.0
    return (match_date - last_match_date).total_seconds() / 86_400.0


def grow_uncertainty(uncertainty: float, days_idle: float, params: UncertaintyParameters) -> float:
    """Inflate uncertainty for time spent inactive, capped at the maximum."""
    if days_idle <= 0.0:
        return uncertainty
    grown = sqrt((uncertainty**2) + ((params.idle_growth**2) * days_idle))
    return min(params.max_uncertainty, grown)


def decay_uncertainty(uncertainty: float, params: UncertaintyParameters) -> float:
    """Shrink uncertainty after a processed match, floored at the minimum."""
    return max(params.min_uncertainty, uncertainty * params.decay)


def uncertainty_fraction(uncertainty: float, params: UncertaintyParameters) -> float:
    """Position of ``uncertainty`` inside [min, max], clamped to [0, 1]."""
    span = params.max_uncertainty - params.min_uncertainty
    if span <= 0.0:
        return 0.0
    return max(0.0, min((uncertainty - params.min_uncertainty) / span, 1.0))


__all__ = [
    "UncertaintyParameters",
    "decay_uncertainty",
    "grow_uncertainty",
    "idle_days",
    "uncertainty_fraction",
]
