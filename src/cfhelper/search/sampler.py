"""Uniform random problem selection."""

from __future__ import annotations

import random
from typing import AbstractSet, Optional, Sequence

from cfhelper.state.models import Problem

from .errors import CatalogEmptyError, FilterEmptyError
from .ranker import ProblemFilter

PROBLEM_URL = "https://codeforces.com/problemset/problem/{contest_id}/{index}"


def pick(
    catalog: Sequence[Problem],
    problem_filter: ProblemFilter,
    exclude_ids: Optional[AbstractSet[str]] = None,
    rng: Optional[random.Random] = None,
) -> Problem:
    """Pick one catalog problem uniformly among those matching ``problem_filter``.

    Args:
        catalog: Full catalog snapshot.
        problem_filter: Same predicate the search uses.
        exclude_ids: Problem ids to leave out, typically already solved ones.
        rng: Random source; the module-level generator when omitted.

    Raises:
        CatalogEmptyError: If ``catalog`` is empty.
        FilterEmptyError: If nothing survives the filter and exclusions.
    """
    if not catalog:
        raise CatalogEmptyError("The problem catalog is empty; refresh it first.")
    excluded = exclude_ids or frozenset()
    pool = [p for p in catalog if p.id not in excluded and problem_filter.matches(p)]
    if not pool:
        raise FilterEmptyError("No problems match the current filters.")
    return (rng or random).choice(pool)


def problem_url(problem: Problem) -> str:
    """Return the problemset URL of ``problem``."""
    if problem.contest_id is not None and problem.index:
        return PROBLEM_URL.format(contest_id=problem.contest_id, index=problem.index)
    digits = len(problem.id) - len(problem.id.lstrip("0123456789"))
    return PROBLEM_URL.format(contest_id=problem.id[:digits], index=problem.id[digits:])


__all__ = ["pick", "problem_url"]
