"""Individual performance relative to the lobby, and its split inside a team.

The performance index compares one player's combat score and KDA to the
averages of all ten players in the match. Sharpening clamps the index and
raises it to a power so strong and weak games separate further. The team
normalizer then turns the sharpened values into multipliers whose K-weighted
mean is exactly 1, so individual performance only decides how a team's rating
movement is shared out, never how large it is.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from domain.ratings.common import MatchParticipationRow


@dataclass(frozen=True)
class PerformanceParameters:
    acs_weight: float = 0.6
    kda_weight: float = 0.4
    assist_weight: float = 0.5
    kda_ratio_cap: float = 2.5
    perf_min: float = 0.70
    perf_max: float = 1.90
    gamma: float = 2.5


@dataclass(frozen=True)
class LobbyStats:
    average_acs: float
    average_kda: float


def calculate_kda(row: MatchParticipationRow, *, assist_weight: float = 0.5) -> float:
    return (row.kills + (assist_weight * row.assists)) / float(max(row.deaths, 1))


def calculate_lobby_stats(
    rows: Sequence[MatchParticipationRow],
    params: PerformanceParameters,
) -> LobbyStats:
    if not rows:
        raise ValueError("lobby statistics need at least one row")
    count = float(len(rows))
    return LobbyStats(
        average_acs=sum(row.acs for row in rows) / count,
        average_kda=sum(calculate_kda(row, assist_weight=params.assist_weight) for row in rows) / count,
    )


def calculate_performance_index(
    row: MatchParticipationRow,
    lobby: LobbyStats,
    params: PerformanceParameters,
) -> float:
    """Weighted ACS and KDA ratios against the lobby; about 1.0 for an average game."""
    acs_ratio = row.acs / lobby.average_acs if lobby.average_acs > 0.0 else 1.0
    if lobby.average_kda > 0.0:
        kda = calculate_kda(row, assist_weight=params.assist_weight)
        kda_ratio = min(kda / lobby.average_kda, params.kda_ratio_cap)
    else:
        kda_ratio = 1.0
    return (params.acs_weight * acs_ratio) + (params.kda_weight * kda_ratio)


def sharpen_performance(performance_index: float, params: PerformanceParameters) -> float:
    clamped = max(params.perf_min, min(performance_index, params.perf_max))
    return clamped**params.gamma


def normalize_team_performance(
    raw_performances: Sequence[float],
    k_factors: Sequence[float],
    *,
    is_gain: bool,
) -> list[float]:
    """Return one performance modifier per player, K-weighted mean of 1.

    On a gain, modifiers follow ``raw / mean(raw)`` so strong players gain
    more. Otherwise they follow ``(1 / raw) / mean(1 / raw)`` so strong players
    lose less.
    """
    if len(raw_performances) != len(k_factors):
        raise ValueError(
            f"got {len(raw_performances)} performances for {len(k_factors)} k-factors"
        )
    if not raw_performances:
        return []
    if any(value <= 0.0 for value in raw_performances):
        raise ValueError("raw performances must be positive")

    total_k = sum(k_factors)
    if total_k <= 0.0:
        raise ValueError("k-factors must sum to a positive value")

    if len(set(raw_performances)) == 1:
        return [1.0] * len(raw_performances)

    weights = list(raw_performances) if is_gain else [1.0 / value for value in raw_performances]
    weighted_mean = sum(k * weight for k, weight in zip(k_factors, weights)) / total_k
    return [weight / weighted_mean for weight in weights]


__all__ = [
    "LobbyStats",
    "PerformanceParameters",
    "calculate_kda",
    "calculate_lobby_stats",
    "calculate_performance_index",
    "normalize_team_performance",
    "sharpen_performance",
]
