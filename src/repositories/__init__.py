"""Database repository and file I/O helpers."""

from repositories.ratings.definitions import RATING_REPOSITORY, ensure_rating_schema

__all__ = ["RATING_REPOSITORY", "ensure_rating_schema"]
