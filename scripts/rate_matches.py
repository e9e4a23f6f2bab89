#!/usr/bin/env python3
"""CLI for rating runs: rate a match export, list configs, show stored standings."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Annotated

import typer
from sqlalchemy import text

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from db import DEFAULT_DB_URL, create_db_engine, create_session_factory
from domain.pipeline import RatingRunResult, rebuild_single_system
from domain.ratings.elo.config import EloSystemConfig, load_elo_system_configs
from domain.ratings.errors import MissingInputError
from domain.ratings.tiers import tier_for_rating
from repositories.exports import atomic_write_csv, audit_frame, leaderboard_frame
from repositories.ratings.definitions import RATING_REPOSITORY
from repositories.sources import read_match_rows_csv

DEFAULT_CONFIG_DIR = ROOT_DIR / "configs" / "ratings"

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Match rating commands.",
)


def setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def select_configs(config_dir: Path, config_name: str | None) -> list[EloSystemConfig]:
    configs = load_elo_system_configs(config_dir)
    if config_name is None:
        return configs

    configs = [config for config in configs if config.file_path.name == config_name]
    if not configs:
        raise typer.BadParameter(
            f"No config named '{config_name}' found in {config_dir}",
            param_hint="--config-name",
        )
    return configs


def echo_leaderboard(result: RatingRunResult, top_n: int) -> None:
    for entry in result.leaderboard[:top_n]:
        tier = tier_for_rating(entry.rating)
        last_played = entry.last_match_date.date().isoformat() if entry.last_match_date else "-"
        typer.echo(
            f"{entry.rank:3d}. {entry.player_id:<20} "
            f"rating={entry.rating:5d} tier={tier.name:<9} "
            f"matches={entry.matches_played:3d} uncertainty={entry.uncertainty:3d} "
            f"last_played={last_played}"
        )


def write_outputs(result: RatingRunResult, output_dir: Path, system_name: str) -> None:
    leaderboard_csv = output_dir / f"{system_name}_leaderboard.csv"
    audit_csv = output_dir / f"{system_name}_audit.csv"
    atomic_write_csv(
        leaderboard_frame(
            result.leaderboard,
            rating_history=result.rating_history,
            match_ids=result.match_ids,
        ),
        leaderboard_csv,
        index=False,
    )
    atomic_write_csv(audit_frame(result.audit, result.header), audit_csv, index=False)
    typer.echo(f"wrote {leaderboard_csv}")
    typer.echo(f"wrote {audit_csv}")


@app.command()
def rate(
    input_csv: Annotated[
        Path,
        typer.Argument(help="CSV export of the raw match rows (first line is the header)."),
    ],
    config_dir: Annotated[
        Path,
        typer.Option("--config-dir", help="Directory of rating system TOML configs."),
    ] = DEFAULT_CONFIG_DIR,
    config_name: Annotated[
        str | None,
        typer.Option(
            "--config-name",
            help="Optional single config filename (for example: default.toml).",
        ),
    ] = None,
    db_url: Annotated[
        str,
        typer.Option("--db-url", help="Database URL for the output tables."),
    ] = DEFAULT_DB_URL,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Compute ratings without writing to the database."),
    ] = False,
    output_dir: Annotated[
        Path | None,
        typer.Option("--output-dir", help="Also write leaderboard and audit CSV files here."),
    ] = None,
    top_n: Annotated[
        int,
        typer.Option("--top-n", help="Number of leaderboard rows to print."),
    ] = 20,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Log every player update."),
    ] = False,
) -> None:
    """Rate every match in INPUT_CSV for each selected config."""
    if top_n < 0:
        raise typer.BadParameter("--top-n must be >= 0")
    setup_logging(verbose)

    configs = select_configs(config_dir, config_name)
    session_factory = None
    if not dry_run:
        engine = create_db_engine(db_url)
        RATING_REPOSITORY.ensure_schema(engine)
        session_factory = create_session_factory(engine)

    typer.echo(f"loaded_configs={len(configs)} config_dir={config_dir}")

    for config in configs:
        try:
            source = read_match_rows_csv(input_csv, config.columns)
        except (FileNotFoundError, ValueError) as exc:
            typer.echo(str(exc), err=True)
            raise typer.Exit(code=1) from exc

        try:
            result, summary = rebuild_single_system(
                session_factory=session_factory,
                repository=RATING_REPOSITORY,
                system_config=config,
                rows=source.rows,
                header=source.header,
                dry_run=dry_run,
                echo=typer.echo,
            )
        except MissingInputError as exc:
            typer.echo(f"{exc} in {input_csv}", err=True)
            raise typer.Exit(code=1) from exc

        for skipped in result.skipped_matches:
            typer.echo(f"skipped match_id={skipped.match_id}: {skipped.reason}")
        typer.echo(
            f"Processed {summary.tracked_players} players across "
            f"{len(result.match_ids)} matches."
        )
        echo_leaderboard(result, top_n)

        if output_dir is not None:
            write_outputs(result, output_dir, config.name)


@app.command()
def list_systems(
    config_dir: Annotated[
        Path,
        typer.Option("--config-dir", help="Directory of rating system TOML configs."),
    ] = DEFAULT_CONFIG_DIR,
) -> None:
    """Print every rating system config found in the config directory."""
    for config in load_elo_system_configs(config_dir):
        typer.echo(f"{config.name} file={config.file_path.name} description={config.description or ''}")


@app.command()
def show_leaderboard(
    system_name: Annotated[
        str,
        typer.Option("--system-name", help="Rating system name from rating_systems.name."),
    ] = "inhouse_default",
    top_n: Annotated[
        int,
        typer.Option("--top-n", help="Number of players to return."),
    ] = 20,
    db_url: Annotated[
        str,
        typer.Option("--db-url", help="Database URL holding the output tables."),
    ] = DEFAULT_DB_URL,
) -> None:
    """Print the stored leaderboard of one rating system."""
    if top_n <= 0:
        raise typer.BadParameter("--top-n must be greater than 0")

    engine = create_db_engine(db_url)
    statement = text(
        """
        SELECT
            le.rank,
            le.player_id,
            le.rating,
            le.matches_played,
            le.uncertainty,
            le.last_match_date
        FROM leaderboard_entries le
        JOIN rating_systems rs ON rs.id = le.rating_system_id
        WHERE rs.name = :system_name
        ORDER BY le.rank
        LIMIT :top_n
        """
    )

    with engine.connect() as connection:
        rows = connection.execute(
            statement,
            {"system_name": system_name, "top_n": top_n},
        ).fetchall()

    if not rows:
        typer.echo(f"No leaderboard rows found for system '{system_name}'.")
        return

    typer.echo(f"system={system_name} top_n={top_n}")
    for row in rows:
        tier = tier_for_rating(row.rating)
        typer.echo(
            f"{row.rank:3d}. {row.player_id:<20} "
            f"rating={row.rating:5d} tier={tier.name:<9} "
            f"matches={row.matches_played:3d} uncertainty={row.uncertainty:3d} "
            f"last_played={row.last_match_date or '-'}"
        )


if __name__ == "__main__":
    app()
