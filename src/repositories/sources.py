"""Read match participation rows from a spreadsheet export."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

import pandas as pd

from domain.ratings.common import ColumnMapping, MatchParticipationRow

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchRowsInput:
    """Header of the source table plus its data rows, in file order."""

    header: tuple[str, ...]
    rows: tuple[MatchParticipationRow, ...]


def _parse_dates(values: pd.Series) -> list[datetime | None]:
    # Offsets are folded into naive UTC so mixed-offset exports parse together.
    parsed = pd.to_datetime(values.str.strip(), errors="coerce", format="mixed", utc=True)
    return [None if pd.isna(value) else value.tz_convert(None).to_pydatetime() for value in parsed]


def _parse_numbers(values: pd.Series) -> pd.Series:
    numbers = pd.to_numeric(values.str.strip(), errors="coerce")
    return numbers.replace([float("inf"), float("-inf")], float("nan")).fillna(0)


def rows_from_frame(frame: pd.DataFrame, columns: ColumnMapping | None = None) -> MatchRowsInput:
    """Convert a string-typed frame into participation rows.

    Unparseable dates become ``None`` (the admission gate rejects the match);
    empty or non-numeric stat cells count as 0.
    """
    columns = columns or ColumnMapping()
    missing = [name for name in columns.required() if name not in frame.columns]
    if missing:
        raise ValueError(f"Input is missing required columns: {missing}")

    frame = frame.fillna("").astype(str)
    dates = _parse_dates(frame[columns.date])
    rounds_won = _parse_numbers(frame[columns.rounds_won])
    rounds_lost = _parse_numbers(frame[columns.rounds_lost])
    acs = _parse_numbers(frame[columns.acs])
    kills = _parse_numbers(frame[columns.kills])
    deaths = _parse_numbers(frame[columns.deaths])
    assists = _parse_numbers(frame[columns.assists])
    has_map = columns.map_name in frame.columns

    rows: list[MatchParticipationRow] = []
    for position, (_, record) in enumerate(frame.iterrows()):
        rows.append(
            MatchParticipationRow(
                row_index=position,
                match_id=record[columns.match_id].strip(),
                date=dates[position],
                raw_date=record[columns.date],
                player_id=record[columns.player_id].strip(),
                team=record[columns.team],
                rounds_won=int(rounds_won.iloc[position]),
                rounds_lost=int(rounds_lost.iloc[position]),
                acs=float(acs.iloc[position]),
                kills=int(kills.iloc[position]),
                deaths=int(deaths.iloc[position]),
                assists=int(assists.iloc[position]),
                map_name=(record[columns.map_name].strip() or None) if has_map else None,
                raw_values=tuple(record.tolist()),
            )
        )

    return MatchRowsInput(header=tuple(str(name) for name in frame.columns), rows=tuple(rows))


def read_match_rows_csv(path: Path, columns: ColumnMapping | None = None) -> MatchRowsInput:
    """Load every data row of a CSV export; the first line is the header."""
    if not path.is_file():
        raise FileNotFoundError(f"Match data file not found: {path}")

    frame = pd.read_csv(path, dtype=str, keep_default_na=False, skip_blank_lines=True)
    logger.info("Loaded %d rows from %s", len(frame), path)
    return rows_from_frame(frame, columns)


__all__ = ["MatchRowsInput", "read_match_rows_csv", "rows_from_frame"]
