"""Filter and rank problems for a search query.

Everything here is a pure function of its arguments: the same query,
rating bounds, folders, and catalog always produce the same ordering.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from cfhelper.state.models import Folder, Problem

GLOBAL_RESULT_LIMIT = 50
DEFAULT_MAX_RATING = 10_000


@dataclass(frozen=True)
class ProblemFilter:
    """Text and rating conditions shared by search and random picks.

    Attributes:
        query: Case-insensitive substring matched against id, name, and tags.
        min_rating: Lower rating bound; None means unbounded (resolves to 0).
        max_rating: Upper rating bound; None resolves to ``default_max_rating``.
        default_max_rating: Value used when ``max_rating`` is None.
    """

    query: str = ""
    min_rating: Optional[int] = None
    max_rating: Optional[int] = None
    default_max_rating: int = DEFAULT_MAX_RATING

    @property
    def is_active(self) -> bool:
        """Return False when neither a query nor a rating bound was given."""
        return bool(self.query) or self.min_rating is not None or self.max_rating is not None

    def matches(self, problem: Problem) -> bool:
        """Return True when ``problem`` satisfies both the text and rating conditions."""
        return self._text_matches(problem) and self._rating_matches(problem)

    def _text_matches(self, problem: Problem) -> bool:
        needle = self.query.lower()
        if not needle:
            return True
        return (
            needle in problem.id.lower()
            or needle in problem.name.lower()
            or any(needle in tag.lower() for tag in problem.tags)
        )

    def _rating_matches(self, problem: Problem) -> bool:
        low = self.min_rating if self.min_rating is not None else 0
        high = self.max_rating if self.max_rating is not None else self.default_max_rating
        if problem.rating:
            return low <= problem.rating <= high
        return low == 0


@dataclass(frozen=True)
class SearchResults:
    """Matches from the user's folders (``my``) and from the catalog (``global_``)."""

    my: list[Problem] = field(default_factory=list)
    global_: list[Problem] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.my and not self.global_


def score(problem: Problem, query: str) -> int:
    """Return the rank bucket of ``problem`` for ``query`` (lower is better).

    0 for an exact id match, 1 for an id prefix, 2 for a name prefix, 3 otherwise.
    """
    needle = query.lower()
    if not needle:
        return 3
    problem_id = problem.id.lower()
    if problem_id == needle:
        return 0
    if problem_id.startswith(needle):
        return 1
    if problem.name.lower().startswith(needle):
        return 2
    return 3


def rank(problems: Iterable[Problem], query: str) -> list[Problem]:
    """Sort by score, then shorter id, then id."""
    return sorted(problems, key=lambda p: (score(p, query), len(p.id), p.id))


def folder_matches(folders: Sequence[Folder], problem_filter: ProblemFilter) -> list[Problem]:
    """Return matching folder problems in first-seen order, deduplicated by id."""
    seen: set[str] = set()
    matches: list[Problem] = []
    for folder in folders:
        for problem in folder.problems:
            if problem.id in seen or not problem_filter.matches(problem):
                continue
            seen.add(problem.id)
            matches.append(problem)
    return matches


def search(
    query: str,
    min_rating: Optional[int],
    max_rating: Optional[int],
    folders: Sequence[Folder],
    catalog: Sequence[Problem],
    *,
    limit: int = GLOBAL_RESULT_LIMIT,
    default_max_rating: int = DEFAULT_MAX_RATING,
) -> SearchResults:
    """Search the user's folders and the catalog.

    Args:
        query: Free-text query; empty matches everything.
        min_rating: Optional lower rating bound.
        max_rating: Optional upper rating bound.
        folders: User folders searched for the ``my`` list.
        catalog: Catalog problems searched for the ``global_`` list.
        limit: Maximum size of ``global_`` after ranking.
        default_max_rating: Upper bound applied when ``max_rating`` is None.

    Returns:
        SearchResults: Both ranked lists; both empty when no query or bound is
        given, which callers treat as "no active search".
    """
    problem_filter = ProblemFilter(query, min_rating, max_rating, default_max_rating)
    if not problem_filter.is_active:
        return SearchResults()

    my = rank(folder_matches(folders, problem_filter), query)
    global_ = rank((p for p in catalog if problem_filter.matches(p)), query)[: max(limit, 0)]
    return SearchResults(my=my, global_=global_)


__all__ = [
    "GLOBAL_RESULT_LIMIT",
    "DEFAULT_MAX_RATING",
    "ProblemFilter",
    "SearchResults",
    "score",
    "rank",
    "folder_matches",
    "search",
]
