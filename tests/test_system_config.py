"""Tests for TOML-based rating system config loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from domain.ratings.elo.config import load_elo_system_config, load_elo_system_configs

REPO_CONFIG_DIR = Path(__file__).resolve().parents[1] / "configs" / "ratings"


def test_load_elo_system_configs_from_directory(tmp_path: Path) -> None:
    config_path = tmp_path / "default.toml"
    config_path.write_text(
        """
[system]
name = "system_a"
description = "A test system"

[elo]
initial_rating = 1550.0
base_k = 24.0
provisional_matches = 20
min_k_fraction = 0.4
scale_factor = 420.0
margin_scale = 5.0
k_mult_max = 1.5

[uncertainty]
min = 40.0
max = 180.0
initial = 150.0
idle_growth = 10.0
decay = 0.9

[performance]
acs_weight = 0.7
kda_weight = 0.3
assist_weight = 0.25
kda_ratio_cap = 3.0
perf_min = 0.6
perf_max = 2.0
gamma = 2.0

[roster]
team_size = 3

[columns]
player_id = "Name"
acs = "CombatScore"
""".strip()
    )

    configs = load_elo_system_configs(tmp_path)
    assert len(configs) == 1

    system = configs[0]
    params = system.parameters
    assert system.name == "system_a"
    assert system.description == "A test system"
    assert params.elo.initial_rating == pytest.approx(1550.0)
    assert params.elo.base_k == pytest.approx(24.0)
    assert params.elo.provisional_matches == 20
    assert params.elo.min_k_fraction == pytest.approx(0.4)
    assert params.elo.scale_factor == pytest.approx(420.0)
    assert params.elo.margin_scale == pytest.approx(5.0)
    assert params.elo.k_mult_max == pytest.approx(1.5)
    assert params.uncertainty.min_uncertainty == pytest.approx(40.0)
    assert params.uncertainty.max_uncertainty == pytest.approx(180.0)
    assert params.uncertainty.initial_uncertainty == pytest.approx(150.0)
    assert params.uncertainty.idle_growth == pytest.approx(10.0)
    assert params.uncertainty.decay == pytest.approx(0.9)
    assert params.performance.acs_weight == pytest.approx(0.7)
    assert params.performance.kda_weight == pytest.approx(0.3)
    assert params.performance.assist_weight == pytest.approx(0.25)
    assert params.performance.kda_ratio_cap == pytest.approx(3.0)
    assert params.performance.perf_min == pytest.approx(0.6)
    assert params.performance.perf_max == pytest.approx(2.0)
    assert params.performance.gamma == pytest.approx(2.0)
    assert params.team_size == 3
    assert system.columns.player_id == "Name"
    assert system.columns.acs == "CombatScore"
    assert system.columns.match_id == "MatchID"


def test_missing_sections_fall_back_to_defaults(tmp_path: Path) -> None:
    config_path = tmp_path / "minimal.toml"
    config_path.write_text('[system]\nname = "minimal"\n')

    system = load_elo_system_config(config_path)
    assert system.description is None
    assert system.parameters.elo.initial_rating == pytest.approx(1500.0)
    assert system.parameters.uncertainty.decay == pytest.approx(0.85)
    assert system.parameters.performance.gamma == pytest.approx(2.5)
    assert system.parameters.team_size == 5

    config_json = system.as_config_json()
    assert config_json["roster"] == {"team_size": 5}
    assert config_json["columns"]["date"] == "Date"


def test_repository_default_config_loads() -> None:
    configs = load_elo_system_configs(REPO_CONFIG_DIR)
    assert [config.name for config in configs] == ["inhouse_default"]


def test_duplicate_names_raise_error(tmp_path: Path) -> None:
    template = '[system]\nname = "dup"\n'
    (tmp_path / "a.toml").write_text(template)
    (tmp_path / "b.toml").write_text(template)

    with pytest.raises(ValueError, match="Duplicate elo system names"):
        load_elo_system_configs(tmp_path)


def test_missing_name_raises_error(tmp_path: Path) -> None:
    config_path = tmp_path / "nameless.toml"
    config_path.write_text('[system]\ndescription = "no name"\n')

    with pytest.raises(ValueError, match=r"\[system\]\.name is required"):
        load_elo_system_config(config_path)


@pytest.mark.parametrize(
    ("section", "body", "message"),
    [
        ("elo", "base_k = 0", r"\[elo\]\.base_k must be > 0"),
        ("elo", "k_mult_max = 0.5", r"\[elo\]\.k_mult_max must be >= 1"),
        ("uncertainty", "min = 120.0\nmax = 100.0", r"\[uncertainty\]\.max must be >="),
        ("uncertainty", "initial = 500.0", r"\[uncertainty\]\.initial must be between"),
        ("uncertainty", "decay = 1.5", r"\[uncertainty\]\.decay must be in"),
        ("performance", "perf_min = 2.0\nperf_max = 1.0", r"\[performance\]\.perf_max must be >="),
        ("roster", "team_size = 0", r"\[roster\]\.team_size must be > 0"),
    ],
)
def test_invalid_parameters_raise_error(
    tmp_path: Path,
    section: str,
    body: str,
    message: str,
) -> None:
    config_path = tmp_path / "bad.toml"
    config_path.write_text(f'[system]\nname = "bad"\n\n[{section}]\n{body}\n')

    with pytest.raises(ValueError, match=message):
        load_elo_system_config(config_path)


def test_unknown_column_key_raises_error(tmp_path: Path) -> None:
    config_path = tmp_path / "columns.toml"
    config_path.write_text('[system]\nname = "cols"\n\n[columns]\nheadshots = "HS"\n')

    with pytest.raises(ValueError, match="unknown \\[columns\\] keys"):
        load_elo_system_config(config_path)


def test_empty_directory_raises_error(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="No .toml config files"):
        load_elo_system_configs(tmp_path)
