"""Elo rating modules."""

from domain.ratings.elo.calculator import (
    EloParameters,
    calculate_base_k,
    calculate_expected_score,
    calculate_k_factor,
    calculate_team_performance,
)
from domain.ratings.elo.config import EloSystemConfig, load_elo_system_config, load_elo_system_configs
from domain.ratings.elo.player_calculator import (
    MatchContext,
    PlayerEloCalculator,
    PlayerRatingEvent,
    RatingParameters,
)

__all__ = [
    "EloParameters",
    "EloSystemConfig",
    "MatchContext",
    "PlayerEloCalculator",
    "PlayerRatingEvent",
    "RatingParameters",
    "calculate_base_k",
    "calculate_expected_score",
    "calculate_k_factor",
    "calculate_team_performance",
    "load_elo_system_config",
    "load_elo_system_configs",
]
