"""Normalize raw ``problemset.problems`` entries into catalog problems."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from pydantic import ValidationError

from cfhelper.remote.models import WireProblem
from cfhelper.state.models import Problem

LOGGER = logging.getLogger(__name__)


def make_problem_id(contest_id: int, index: str) -> str:
    """Return the catalog identity of a problem, e.g. ``1850A``."""
    return f"{contest_id}{index}"


def normalize_problem(raw: Mapping[str, Any]) -> Problem | None:
    """Validate one wire entry and convert it to a ``Problem``.

    Returns:
        Problem | None: The problem, or None when the entry has no contest id,
        index, or name and therefore cannot be identified.
    """
    try:
        wire = WireProblem.model_validate(raw)
    except ValidationError as exc:
        LOGGER.debug("Skipping malformed problem %r: %s", raw, exc)
        return None
    if wire.contest_id is None or not wire.index or not wire.name:
        return None
    return Problem(
        id=make_problem_id(wire.contest_id, wire.index),
        name=wire.name,
        tags=list(wire.tags),
        rating=wire.rating,
        contest_id=wire.contest_id,
        index=wire.index,
    )


def normalize_problems(entries: Iterable[Mapping[str, Any]]) -> list[Problem]:
    """Normalize a full problem list, keeping the first occurrence of each id."""
    problems: list[Problem] = []
    seen: set[str] = set()
    skipped = 0
    for raw in entries:
        problem = normalize_problem(raw) if isinstance(raw, Mapping) else None
        if problem is None or problem.id in seen:
            skipped += 1
            continue
        seen.add(problem.id)
        problems.append(problem)
    if skipped:
        LOGGER.info("Dropped %d unusable or duplicate catalog entries.", skipped)
    return problems


__all__ = ["make_problem_id", "normalize_problem", "normalize_problems"]
