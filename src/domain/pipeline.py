"""Batch rating run: rows in, leaderboard and audit table out."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from domain.ratings.admission import admit_match
from domain.ratings.common import MatchParticipationRow, SkippedMatch
from domain.ratings.elo.config import EloSystemConfig
from domain.ratings.elo.player_calculator import (
    PlayerEloCalculator,
    PlayerRatingEvent,
    RatingParameters,
)
from domain.ratings.errors import InvalidMatchDateError, MalformedMatchError, MissingInputError
from domain.ratings.ingestion import group_matches
from domain.ratings.leaderboard import (
    AuditEntry,
    LeaderboardEntry,
    build_audit_table,
    build_leaderboard,
    build_rating_history,
)
from domain.ratings.state import PlayerStateTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RatingRunResult:
    """Everything one batch run produces."""

    header: tuple[str, ...]
    leaderboard: list[LeaderboardEntry]
    audit: list[AuditEntry]
    events: list[PlayerRatingEvent]
    skipped_matches: list[SkippedMatch]
    match_ids: list[str]
    rating_history: dict[str, dict[str, int]]

    @property
    def processed_matches(self) -> int:
        return len(self.match_ids) - len(self.skipped_matches)


@dataclass(frozen=True)
class RebuildSummary:
    """Outcome for one rebuilt system config."""

    system_name: str
    config_file: str
    system_id: int | None
    processed_matches: int
    skipped_matches: int
    inserted_events: int
    tracked_players: int
    dry_run: bool


def run_rating_batch(
    rows: Sequence[MatchParticipationRow],
    *,
    parameters: RatingParameters | None = None,
    header: Sequence[str] = (),
) -> RatingRunResult:
    """Rate every admitted match in ascending match-id order.

    Raises MissingInputError before touching any state when ``rows`` is empty.
    Malformed matches and matches with invalid dates are logged and skipped;
    their rows appear in the audit table without a delta.
    """
    if not rows:
        raise MissingInputError("No match data rows found")

    parameters = parameters or RatingParameters()
    states = PlayerStateTable(
        initial_rating=parameters.elo.initial_rating,
        initial_uncertainty=parameters.uncertainty.initial_uncertainty,
    )
    calculator = PlayerEloCalculator(parameters, states=states)

    matches = group_matches(rows)
    logger.info("Number of matches: %d", len(matches))

    events: list[PlayerRatingEvent] = []
    skipped: list[SkippedMatch] = []
    for match in matches:
        try:
            admitted = admit_match(match, team_size=parameters.team_size)
        except MalformedMatchError as exc:
            logger.warning("Skipping match: %s", exc)
            skipped.append(SkippedMatch(match_id=match.match_id, reason=str(exc)))
            continue
        except InvalidMatchDateError as exc:
            logger.error("Skipping match: %s", exc)
            skipped.append(SkippedMatch(match_id=match.match_id, reason=str(exc)))
            continue

        events.extend(calculator.process_match(admitted))

    deltas_by_row = {event.row_index: event.rounded_delta for event in events}
    leaderboard = build_leaderboard(states)
    logger.info(
        "Processed %d players across %d matches (%d skipped)",
        len(leaderboard),
        len(matches),
        len(skipped),
    )

    return RatingRunResult(
        header=tuple(header),
        leaderboard=leaderboard,
        audit=build_audit_table(rows, deltas_by_row),
        events=events,
        skipped_matches=skipped,
        match_ids=[match.match_id for match in matches],
        rating_history=build_rating_history(events),
    )


def rebuild_single_system(
    *,
    session_factory,
    repository: Any,
    system_config: EloSystemConfig,
    rows: Sequence[MatchParticipationRow],
    header: Sequence[str] = (),
    dry_run: bool = False,
    echo: Callable[[str], None] | None = None,
) -> tuple[RatingRunResult, RebuildSummary]:
    """Run one configured system and replace its stored output tables."""
    result = run_rating_batch(rows, parameters=system_config.parameters, header=header)
    tracked_players = len(result.leaderboard)

    if dry_run:
        if echo is not None:
            echo(
                f"[dry-run] config={system_config.file_path.name} "
                f"system={system_config.name} "
                f"processed_matches={result.processed_matches} "
                f"skipped_matches={len(result.skipped_matches)} "
                f"tracked_players={tracked_players}"
            )
        return result, RebuildSummary(
            system_name=system_config.name,
            config_file=system_config.file_path.name,
            system_id=None,
            processed_matches=result.processed_matches,
            skipped_matches=len(result.skipped_matches),
            inserted_events=0,
            tracked_players=tracked_players,
            dry_run=True,
        )

    with session_factory() as session:
        try:
            system = repository.upsert_system(
                session,
                name=system_config.name,
                description=system_config.description,
                config_json=system_config.as_config_json(),
            )
            system_id = int(getattr(system, "id"))

            repository.delete_rows_for_system(session, system_id)
            repository.insert_events(session, result.events, system_id=system_id)
            repository.insert_leaderboard(session, result.leaderboard, system_id=system_id)
            repository.insert_audit(session, result.audit, system_id=system_id)
            session.commit()
        except Exception:
            session.rollback()
            raise

        tracked_players = repository.count_tracked_entities(session, system_id=system_id)

    if echo is not None:
        echo(
            "completed "
            f"config={system_config.file_path.name} "
            f"system={system_config.name} "
            f"system_id={system_id} "
            f"processed_matches={result.processed_matches} "
            f"skipped_matches={len(result.skipped_matches)} "
            f"inserted_events={len(result.events)} "
            f"tracked_players={tracked_players}"
        )

    return result, RebuildSummary(
        system_name=system_config.name,
        config_file=system_config.file_path.name,
        system_id=system_id,
        processed_matches=result.processed_matches,
        skipped_matches=len(result.skipped_matches),
        inserted_events=len(result.events),
        tracked_players=tracked_players,
        dry_run=False,
    )


__all__ = [
    "RatingRunResult",
    "RebuildSummary",
    "rebuild_single_system",
    "run_rating_batch",
]
