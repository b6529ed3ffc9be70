"""Problem search and random selection."""

from .errors import CatalogEmptyError, EmptyPoolError, FilterEmptyError
from .ranker import (
    DEFAULT_MAX_RATING,
    GLOBAL_RESULT_LIMIT,
    ProblemFilter,
    SearchResults,
    rank,
    score,
    search,
)
from .sampler import pick, problem_url

__all__ = [
    "DEFAULT_MAX_RATING",
    "GLOBAL_RESULT_LIMIT",
    "ProblemFilter",
    "SearchResults",
    "rank",
    "score",
    "search",
    "pick",
    "problem_url",
    "EmptyPoolError",
    "CatalogEmptyError",
    "FilterEmptyError",
]
