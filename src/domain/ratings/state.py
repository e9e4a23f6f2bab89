"""Per-player rating state owned by one rating run."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, replace
from datetime import datetime


@dataclass
class PlayerState:
    rating: float
    matches_played: int
    uncertainty: float
    last_match_date: datetime | None = None
    recorded_delta_total: int = 0


class PlayerStateTable:
    """Mapping of player id to mutable rating state, filled lazily."""

    def __init__(self, *, initial_rating: float, initial_uncertainty: float) -> None:
        self.initial_rating = initial_rating
        self.initial_uncertainty = initial_uncertainty
        self._states: dict[str, PlayerState] = {}

    def get_or_create(self, player_id: str) -> PlayerState:
        state = self._states.get(player_id)
        if state is None:
            state = PlayerState(
                rating=self.initial_rating,
                matches_played=0,
                uncertainty=self.initial_uncertainty,
            )
            self._states[player_id] = state
        return state

    def get(self, player_id: str) -> PlayerState | None:
        return self._states.get(player_id)

    def snapshot(self, player_id: str) -> PlayerState:
        """Copy of the player's current state (defaults when unseen); never inserts."""
        state = self._states.get(player_id)
        if state is None:
            return PlayerState(
                rating=self.initial_rating,
                matches_played=0,
                uncertainty=self.initial_uncertainty,
            )
        return replace(state)

    def items(self) -> Iterator[tuple[str, PlayerState]]:
        return iter(self._states.items())

    def __len__(self) -> int:
        return len(self._states)


__all__ = ["PlayerState", "PlayerStateTable"]
