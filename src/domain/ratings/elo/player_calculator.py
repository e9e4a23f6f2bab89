"""Player-level Elo with uncertainty-scaled K and performance-weighted team splits."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime

from domain.ratings.common import AdmittedMatch, MatchParticipationRow, round_half_up
from domain.ratings.elo.calculator import (
    EloParameters,
    calculate_expected_score,
    calculate_k_factor,
    calculate_team_performance,
)
from domain.ratings.performance import (
    LobbyStats,
    PerformanceParameters,
    calculate_lobby_stats,
    calculate_performance_index,
    normalize_team_performance,
    sharpen_performance,
)
from domain.ratings.state import PlayerState, PlayerStateTable
from domain.ratings.uncertainty import (
    UncertaintyParameters,
    decay_uncertainty,
    grow_uncertainty,
    idle_days,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RatingParameters:
    elo: EloParameters = field(default_factory=EloParameters)
    uncertainty: UncertaintyParameters = field(default_factory=UncertaintyParameters)
    performance: PerformanceParameters = field(default_factory=PerformanceParameters)
    team_size: int = 5


@dataclass(frozen=True)
class MatchContext:
    """Pre-match values shared by every player update in one match."""

    match_id: str
    match_date: datetime
    lobby: LobbyStats
    team_a_avg_rating: float
    team_b_avg_rating: float
    team_a_expected: float
    team_b_expected: float
    team_a_perf: float
    team_b_perf: float


@dataclass(frozen=True)
class PlayerRatingEvent:
    row_index: int
    player_id: str
    team: str
    match_id: str
    event_time: datetime
    won: bool
    team_performance: float
    expected_score: float
    pre_rating: float
    rating_delta: float
    rounded_delta: int
    post_rating: float
    k_factor: float
    performance_index: float
    raw_performance: float
    performance_modifier: float
    pre_uncertainty: float
    post_uncertainty: float
    matches_played_pre: int


@dataclass(frozen=True)
class _PlannedUpdate:
    row: MatchParticipationRow
    pre_state: PlayerState
    grown_uncertainty: float
    k_factor: float
    performance_index: float
    raw_performance: float
    performance_modifier: float
    team_performance: float
    expected_score: float
    rating_delta: float


class PlayerEloCalculator:
    """Stateful match-by-match player rating calculator.

    Every update in a match is planned from snapshots taken before the match,
    then all of them are applied together, so the order of rows inside a
    match never changes the result.
    """

    def __init__(
        self,
        params: RatingParameters,
        *,
        states: PlayerStateTable | None = None,
    ) -> None:
        self.params = params
        if states is None:
            states = PlayerStateTable(
                initial_rating=params.elo.initial_rating,
                initial_uncertainty=params.uncertainty.initial_uncertainty,
            )
        self.states = states

    def get_rating(self, player_id: str) -> float:
        return self.states.snapshot(player_id).rating

    def tracked_player_count(self) -> int:
        return len(self.states)

    @staticmethod
    def _average_rating(pre_states: Sequence[PlayerState]) -> float:
        return sum(state.rating for state in pre_states) / float(len(pre_states))

    def build_context(self, match: AdmittedMatch) -> MatchContext:
        team_a_pre = [self.states.snapshot(row.player_id) for row in match.team_a]
        team_b_pre = [self.states.snapshot(row.player_id) for row in match.team_b]
        team_a_avg = self._average_rating(team_a_pre)
        team_b_avg = self._average_rating(team_b_pre)
        team_a_perf, team_b_perf = calculate_team_performance(
            match.margin_a,
            self.params.elo.margin_scale,
        )
        return MatchContext(
            match_id=match.match_id,
            match_date=match.match_date,
            lobby=calculate_lobby_stats(match.rows, self.params.performance),
            team_a_avg_rating=team_a_avg,
            team_b_avg_rating=team_b_avg,
            team_a_expected=calculate_expected_score(
                rating=team_a_avg,
                opponent_rating=team_b_avg,
                scale_factor=self.params.elo.scale_factor,
            ),
            team_b_expected=calculate_expected_score(
                rating=team_b_avg,
                opponent_rating=team_a_avg,
                scale_factor=self.params.elo.scale_factor,
            ),
            team_a_perf=team_a_perf,
            team_b_perf=team_b_perf,
        )

    def _plan_side(
        self,
        *,
        rows: tuple[MatchParticipationRow, ...],
        context: MatchContext,
        team_performance: float,
        expected_score: float,
    ) -> list[_PlannedUpdate]:
        base_change = team_performance - expected_score
        is_gain = base_change > 0.0

        pre_states: list[PlayerState] = []
        grown: list[float] = []
        k_factors: list[float] = []
        performance_indices: list[float] = []
        raw_performances: list[float] = []
        for row in rows:
            pre_state = self.states.snapshot(row.player_id)
            uncertainty = grow_uncertainty(
                pre_state.uncertainty,
                idle_days(context.match_date, pre_state.last_match_date),
                self.params.uncertainty,
            )
            performance_index = calculate_performance_index(
                row,
                context.lobby,
                self.params.performance,
            )
            pre_states.append(pre_state)
            grown.append(uncertainty)
            k_factors.append(
                calculate_k_factor(
                    matches_played=pre_state.matches_played,
                    uncertainty=uncertainty,
                    params=self.params.elo,
                    uncertainty_params=self.params.uncertainty,
                )
            )
            performance_indices.append(performance_index)
            raw_performances.append(sharpen_performance(performance_index, self.params.performance))

        modifiers = normalize_team_performance(raw_performances, k_factors, is_gain=is_gain)

        return [
            _PlannedUpdate(
                row=row,
                pre_state=pre_states[index],
                grown_uncertainty=grown[index],
                k_factor=k_factors[index],
                performance_index=performance_indices[index],
                raw_performance=raw_performances[index],
                performance_modifier=modifiers[index],
                team_performance=team_performance,
                expected_score=expected_score,
                rating_delta=k_factors[index] * base_change * modifiers[index],
            )
            for index, row in enumerate(rows)
        ]

    def _apply(self, update: _PlannedUpdate, context: MatchContext) -> PlayerRatingEvent:
        state = self.states.get_or_create(update.row.player_id)
        rounded_delta = round_half_up(update.rating_delta)

        state.rating = update.pre_state.rating + update.rating_delta
        state.matches_played = update.pre_state.matches_played + 1
        state.uncertainty = decay_uncertainty(update.grown_uncertainty, self.params.uncertainty)
        state.last_match_date = context.match_date
        state.recorded_delta_total += rounded_delta

        logger.debug(
            "%s: %.3f vs %.3f exp, PI=%.3f, uncertainty=%.1f, delta=%.2f, new=%.2f",
            update.row.player_id,
            update.team_performance,
            update.expected_score,
            update.performance_index,
            state.uncertainty,
            update.rating_delta,
            state.rating,
        )

        return PlayerRatingEvent(
            row_index=update.row.row_index,
            player_id=update.row.player_id,
            team=update.row.team,
            match_id=context.match_id,
            event_time=context.match_date,
            won=update.team_performance > 0.5,
            team_performance=update.team_performance,
            expected_score=update.expected_score,
            pre_rating=update.pre_state.rating,
            rating_delta=update.rating_delta,
            rounded_delta=rounded_delta,
            post_rating=state.rating,
            k_factor=update.k_factor,
            performance_index=update.performance_index,
            raw_performance=update.raw_performance,
            performance_modifier=update.performance_modifier,
            pre_uncertainty=update.grown_uncertainty,
            post_uncertainty=state.uncertainty,
            matches_played_pre=update.pre_state.matches_played,
        )

    def process_match(self, match: AdmittedMatch) -> list[PlayerRatingEvent]:
        context = self.build_context(match)

        planned = self._plan_side(
            rows=match.team_a,
            context=context,
            team_performance=context.team_a_perf,
            expected_score=context.team_a_expected,
        )
        planned.extend(
            self._plan_side(
                rows=match.team_b,
                context=context,
                team_performance=context.team_b_perf,
                expected_score=context.team_b_expected,
            )
        )

        return [self._apply(update, context) for update in planned]


__all__ = [
    "MatchContext",
    "PlayerEloCalculator",
    "PlayerRatingEvent",
    "RatingParameters",
]
