"""Input errors raised while admitting match data."""

from __future__ import annotations


class RatingInputError(ValueError):
    """Base class for problems with the match rows fed to a rating run."""


class MissingInputError(RatingInputError):
    """The input contains no data rows; the run is aborted."""


class MalformedMatchError(RatingInputError):
    """A match has bad team labels or rosters; only that match is skipped."""

    def __init__(self, match_id: str, message: str) -> None:
        super().__init__(message)
        self.match_id = match_id


class InvalidMatchDateError(RatingInputError):
    """A match date is missing or not a real calendar date; only that match is skipped."""

    def __init__(self, match_id: str, message: str) -> None:
        super().__init__(message)
        self.match_id = match_id


__all__ = [
    "InvalidMatchDateError",
    "MalformedMatchError",
    "MissingInputError",
    "RatingInputError",
]
