"""Rating-system domain modules."""

from domain.pipeline import RatingRunResult, RebuildSummary, rebuild_single_system, run_rating_batch

__all__ = ["RatingRunResult", "RebuildSummary", "rebuild_single_system", "run_rating_batch"]
