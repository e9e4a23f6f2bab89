"""Tabular exports of a rating run for spreadsheet-style presenters."""

from __future__ import annotations

import logging
import shutil
import tempfile
from collections.abc import Sequence
from pathlib import Path

import pandas as pd

from domain.ratings.leaderboard import AuditEntry, LeaderboardEntry

logger = logging.getLogger(__name__)

LEADERBOARD_COLUMNS = ("Rank", "Player", "Rating", "Matches", "Uncertainty", "Last Played")


def leaderboard_frame(
    entries: Sequence[LeaderboardEntry],
    *,
    rating_history: dict[str, dict[str, int]] | None = None,
    match_ids: Sequence[str] = (),
) -> pd.DataFrame:
    """Leaderboard table, optionally followed by one delta column per match."""
    records = []
    for entry in entries:
        record: dict[str, object] = {
            "Rank": entry.rank,
            "Player": entry.player_id,
            "Rating": entry.rating,
            "Matches": entry.matches_played,
            "Uncertainty": entry.uncertainty,
            "Last Played": entry.last_match_date.date().isoformat() if entry.last_match_date else "",
        }
        if rating_history is not None:
            history = rating_history.get(entry.player_id, {})
            for match_id in match_ids:
                record[match_id] = history.get(match_id, "")
        records.append(record)

    columns = list(LEADERBOARD_COLUMNS)
    if rating_history is not None:
        columns.extend(match_ids)
    return pd.DataFrame.from_records(records, columns=columns)


def audit_frame(entries: Sequence[AuditEntry], header: Sequence[str]) -> pd.DataFrame:
    """Original input columns plus a ``Rating Change`` column, in audit order."""
    columns = [*header, "Rating Change"]
    return pd.DataFrame.from_records([entry.values for entry in entries], columns=columns)


def atomic_write_csv(frame: pd.DataFrame, path: Path, **kwargs) -> None:
    """Write a DataFrame to CSV through a temporary file in the same folder."""
    path.parent.mkdir(parents=True, exist_ok=True)

    tmp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            mode="w",
            delete=False,
            suffix=".csv",
            dir=path.parent,
        ) as tmp:
            tmp_path = Path(tmp.name)
        frame.to_csv(tmp_path, **kwargs)
        shutil.move(str(tmp_path), str(path))
        logger.debug("Atomically wrote %d rows to %s", len(frame), path)
    except Exception:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise


__all__ = ["LEADERBOARD_COLUMNS", "atomic_write_csv", "audit_frame", "leaderboard_frame"]
