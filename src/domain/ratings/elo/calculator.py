"""Elo building blocks: expected score, round-margin outcome and K-factor."""

from __future__ import annotations

from dataclasses import dataclass
from math import tanh

from domain.ratings.uncertainty import UncertaintyParameters, uncertainty_fraction


@dataclass(frozen=True)
class EloParameters:
    initial_rating: float = 1500.0
    base_k: float = 32.0
    provisional_matches: int = 30
    min_k_fraction: float = 0.5
    scale_factor: float = 400.0
    margin_scale: float = 4.0
    k_mult_max: float = 2.0


def calculate_expected_score(rating: float, opponent_rating: float, scale_factor: float) -> float:
    """Compute the Elo expected score for one side."""
    return 1.0 / (1.0 + 10.0 ** ((opponent_rating - rating) / scale_factor))


def calculate_team_performance(margin: int | float, margin_scale: float) -> tuple[float, float]:
    """Return (team_a_perf, team_b_perf) from team A's round margin.

    The curve saturates smoothly towards 0/1 for blowouts; a margin of 0 is an
    even 0.5/0.5 split. The two values always sum to 1.
    """
    team_a_perf = 0.5 + (0.5 * tanh(margin / margin_scale))
    return team_a_perf, 1.0 - team_a_perf


def calculate_base_k(matches_played: int, params: EloParameters) -> float:
    """K that shrinks linearly over the provisional period down to a floor."""
    progress = 1.0 - (matches_played / float(params.provisional_matches))
    return params.base_k * max(progress, params.min_k_fraction)


def calculate_k_factor(
    *,
    matches_played: int,
    uncertainty: float,
    params: EloParameters,
    uncertainty_params: UncertaintyParameters,
) -> float:
    u01 = uncertainty_fraction(uncertainty, uncertainty_params)
    k_multiplier = 1.0 + (u01 * (params.k_mult_max - 1.0))
    return calculate_base_k(matches_played, params) * k_multiplier


__all__ = [
    "EloParameters",
    "calculate_base_k",
    "calculate_expected_score",
    "calculate_k_factor",
    "calculate_team_performance",
]
