"""Load rating system definitions from TOML files."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from domain.config_base import BaseSystemConfig, load_system_config, load_system_configs
from domain.ratings.common import ColumnMapping
from domain.ratings.elo.calculator import EloParameters
from domain.ratings.elo.player_calculator import RatingParameters
from domain.ratings.performance import PerformanceParameters
from domain.ratings.uncertainty import UncertaintyParameters


@dataclass(frozen=True)
class EloSystemConfig(BaseSystemConfig):
    """Configuration for one rating run."""

    parameters: RatingParameters
    columns: ColumnMapping = field(default_factory=ColumnMapping)

    def as_config_json(self) -> dict[str, Any]:
        return {
            "elo": asdict(self.parameters.elo),
            "uncertainty": asdict(self.parameters.uncertainty),
            "performance": asdict(self.parameters.performance),
            "roster": {"team_size": self.parameters.team_size},
            "columns": asdict(self.columns),
        }


def load_elo_system_configs(config_dir: Path) -> list[EloSystemConfig]:
    """Load and validate all rating system TOML config files in a directory."""
    return load_system_configs(
        config_dir,
        _parse_elo_system_config,
        duplicate_name_label="elo",
    )


def load_elo_system_config(file_path: Path) -> EloSystemConfig:
    """Load and validate a single rating system TOML config file."""
    return load_system_config(file_path, _parse_elo_system_config)


def _parse_elo_system_config(raw: dict[str, Any], file_path: Path) -> EloSystemConfig:
    system_raw = raw.get("system", {})
    elo_raw = raw.get("elo", {})
    uncertainty_raw = raw.get("uncertainty", {})
    performance_raw = raw.get("performance", {})
    roster_raw = raw.get("roster", {})
    columns_raw = raw.get("columns", {})

    name = str(system_raw.get("name", "")).strip()
    if not name:
        raise ValueError(f"{file_path}: [system].name is required")

    description_value = system_raw.get("description")
    description = None if description_value is None else str(description_value)

    elo = EloParameters(
        initial_rating=float(elo_raw.get("initial_rating", 1500.0)),
        base_k=float(elo_raw.get("base_k", 32.0)),
        provisional_matches=int(elo_raw.get("provisional_matches", 30)),
        min_k_fraction=float(elo_raw.get("min_k_fraction", 0.5)),
        scale_factor=float(elo_raw.get("scale_factor", 400.0)),
        margin_scale=float(elo_raw.get("margin_scale", 4.0)),
        k_mult_max=float(elo_raw.get("k_mult_max", 2.0)),
    )
    uncertainty = UncertaintyParameters(
        min_uncertainty=float(uncertainty_raw.get("min", 50.0)),
        max_uncertainty=float(uncertainty_raw.get("max", 200.0)),
        initial_uncertainty=float(uncertainty_raw.get("initial", 200.0)),
        idle_growth=float(uncertainty_raw.get("idle_growth", 20.0)),
        decay=float(uncertainty_raw.get("decay", 0.85)),
    )
    performance = PerformanceParameters(
        acs_weight=float(performance_raw.get("acs_weight", 0.6)),
        kda_weight=float(performance_raw.get("kda_weight", 0.4)),
        assist_weight=float(performance_raw.get("assist_weight", 0.5)),
        kda_ratio_cap=float(performance_raw.get("kda_ratio_cap", 2.5)),
        perf_min=float(performance_raw.get("perf_min", 0.70)),
        perf_max=float(performance_raw.get("perf_max", 1.90)),
        gamma=float(performance_raw.get("gamma", 2.5)),
    )
    parameters = RatingParameters(
        elo=elo,
        uncertainty=uncertainty,
        performance=performance,
        team_size=int(roster_raw.get("team_size", 5)),
    )
    _validate_parameters(file_path=file_path, parameters=parameters)

    defaults = ColumnMapping()
    columns = ColumnMapping(
        **{
            key: str(columns_raw.get(key, getattr(defaults, key)))
            for key in asdict(defaults)
        }
    )
    unknown_columns = sorted(set(columns_raw) - set(asdict(defaults)))
    if unknown_columns:
        raise ValueError(f"{file_path}: unknown [columns] keys {unknown_columns}")

    return EloSystemConfig(
        name=name,
        description=description,
        file_path=file_path,
        parameters=parameters,
        columns=columns,
    )


def _validate_parameters(*, file_path: Path, parameters: RatingParameters) -> None:
    elo = parameters.elo
    uncertainty = parameters.uncertainty
    performance = parameters.performance

    if elo.initial_rating <= 0.0:
        raise ValueError(f"{file_path}: [elo].initial_rating must be > 0")
    if elo.base_k <= 0.0:
        raise ValueError(f"{file_path}: [elo].base_k must be > 0")
    if elo.provisional_matches <= 0:
        raise ValueError(f"{file_path}: [elo].provisional_matches must be > 0")
    if elo.min_k_fraction <= 0.0 or elo.min_k_fraction > 1.0:
        raise ValueError(f"{file_path}: [elo].min_k_fraction must be in (0, 1]")
    if elo.scale_factor <= 0.0:
        raise ValueError(f"{file_path}: [elo].scale_factor must be > 0")
    if elo.margin_scale <= 0.0:
        raise ValueError(f"{file_path}: [elo].margin_scale must be > 0")
    if elo.k_mult_max < 1.0:
        raise ValueError(f"{file_path}: [elo].k_mult_max must be >= 1")

    if uncertainty.min_uncertainty <= 0.0:
        raise ValueError(f"{file_path}: [uncertainty].min must be > 0")
    if uncertainty.max_uncertainty < uncertainty.min_uncertainty:
        raise ValueError(f"{file_path}: [uncertainty].max must be >= [uncertainty].min")
    if not uncertainty.min_uncertainty <= uncertainty.initial_uncertainty <= uncertainty.max_uncertainty:
        raise ValueError(f"{file_path}: [uncertainty].initial must be between min and max")
    if uncertainty.idle_growth < 0.0:
        raise ValueError(f"{file_path}: [uncertainty].idle_growth must be >= 0")
    if uncertainty.decay <= 0.0 or uncertainty.decay > 1.0:
        raise ValueError(f"{file_path}: [uncertainty].decay must be in (0, 1]")

    if performance.acs_weight < 0.0:
        raise ValueError(f"{file_path}: [performance].acs_weight must be >= 0")
    if performance.kda_weight < 0.0:
        raise ValueError(f"{file_path}: [performance].kda_weight must be >= 0")
    if performance.acs_weight + performance.kda_weight <= 0.0:
        raise ValueError(f"{file_path}: [performance] weights must not both be 0")
    if performance.assist_weight < 0.0:
        raise ValueError(f"{file_path}: [performance].assist_weight must be >= 0")
    if performance.kda_ratio_cap <= 0.0:
        raise ValueError(f"{file_path}: [performance].kda_ratio_cap must be > 0")
    if performance.perf_min <= 0.0:
        raise ValueError(f"{file_path}: [performance].perf_min must be > 0")
    if performance.perf_max < performance.perf_min:
        raise ValueError(f"{file_path}: [performance].perf_max must be >= [performance].perf_min")
    if performance.gamma <= 0.0:
        raise ValueError(f"{file_path}: [performance].gamma must be > 0")

    if parameters.team_size <= 0:
        raise ValueError(f"{file_path}: [roster].team_size must be > 0")
