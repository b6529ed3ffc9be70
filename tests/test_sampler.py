"""Random problem selection tests."""

from __future__ import annotations

import random
from collections import Counter

import pytest

from cfhelper.search import (
    CatalogEmptyError,
    EmptyPoolError,
    FilterEmptyError,
    ProblemFilter,
    pick,
    problem_url,
)
from cfhelper.state.models import Problem

CATALOG = [
    Problem(id="4A", name="Watermelon", rating=800, tags=["math"], contest_id=4, index="A"),
    Problem(id="1850A", name="To My Critics", rating=800, tags=["implementation"], contest_id=1850, index="A"),
    Problem(id="1950F2", name="Hard version", rating=2100, tags=["dp"], contest_id=1950, index="F2"),
    Problem(id="2000Z", name="Unrated", tags=["greedy"], contest_id=2000, index="Z"),
]


def test_empty_catalog_raises_catalog_empty() -> None:
    with pytest.raises(CatalogEmptyError):
        pick([], ProblemFilter())


def test_no_match_raises_filter_empty() -> None:
    with pytest.raises(FilterEmptyError) as excinfo:
        pick(CATALOG, ProblemFilter("no such problem"))

    assert isinstance(excinfo.value, EmptyPoolError)


def test_pick_respects_filter() -> None:
    rng = random.Random(7)
    problem_filter = ProblemFilter("", 2000, None)

    picks = {pick(CATALOG, problem_filter, rng=rng).id for _ in range(20)}

    assert picks == {"1950F2"}


def test_inactive_filter_uses_whole_catalog() -> None:
    rng = random.Random(1)

    counts = Counter(pick(CATALOG, ProblemFilter(), rng=rng).id for _ in range(400))

    assert set(counts) == {problem.id for problem in CATALOG}
    assert min(counts.values()) > 50


def test_excluded_ids_are_never_picked() -> None:
    rng = random.Random(3)
    excluded = {"4A", "1850A", "2000Z"}

    assert pick(CATALOG, ProblemFilter(), excluded, rng=rng).id == "1950F2"
    with pytest.raises(FilterEmptyError):
        pick(CATALOG, ProblemFilter(), excluded | {"1950F2"})


def test_problem_url() -> None:
    assert problem_url(CATALOG[2]) == "https://codeforces.com/problemset/problem/1950/F2"
    assert (
        problem_url(Problem(id="1850A", name="Imported"))
        == "https://codeforces.com/problemset/problem/1850/A"
    )
