"""Rating-system domain modules."""

from domain.ratings.common import (
    AdmittedMatch,
    ColumnMapping,
    MatchParticipationRow,
    MatchRecord,
    SkippedMatch,
    Team,
)
from domain.ratings.errors import (
    InvalidMatchDateError,
    MalformedMatchError,
    MissingInputError,
    RatingInputError,
)

__all__ = [
    "AdmittedMatch",
    "ColumnMapping",
    "InvalidMatchDateError",
    "MalformedMatchError",
    "MatchParticipationRow",
    "MatchRecord",
    "MissingInputError",
    "RatingInputError",
    "SkippedMatch",
    "Team",
]
