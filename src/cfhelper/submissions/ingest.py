"""Normalize raw ``user.status`` entries into submission records."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from pydantic import ValidationError

from cfhelper.remote.models import WireSubmission

from .models import SubmissionRecord, Verdict

LOGGER = logging.getLogger(__name__)


def normalize_submission(raw: Mapping[str, Any]) -> SubmissionRecord | None:
    """Convert one wire submission into a record.

    Returns:
        SubmissionRecord | None: None when the entry is malformed or has no
        problem reference (contest id and index) to key it by.
    """
    try:
        wire = WireSubmission.model_validate(raw)
    except ValidationError as exc:
        LOGGER.debug("Skipping malformed submission: %s", exc)
        return None

    problem = wire.problem
    if problem is None or problem.contest_id is None or not problem.index:
        return None

    try:
        return SubmissionRecord(
            id=wire.id,
            contest_id=problem.contest_id,
            index=problem.index,
            name=problem.name or "",
            rating=problem.rating,
            tags=list(problem.tags),
            programming_language=wire.programming_language,
            verdict=_verdict(wire.id, wire.verdict),
            testset=wire.testset,
            passed_test_count=wire.passed_test_count,
            time_consumed_millis=wire.time_consumed_millis,
            memory_consumed_bytes=wire.memory_consumed_bytes,
            creation_time_seconds=wire.creation_time_seconds,
            code=wire.code,
        )
    except ValidationError as exc:
        LOGGER.debug("Skipping submission %s with invalid values: %s", wire.id, exc)
        return None


def _verdict(submission_id: int, raw: str | None) -> Verdict | None:
    if raw is None:
        return None
    try:
        return Verdict(raw)
    except ValueError:
        LOGGER.warning(
            "Submission %s has unrecognised verdict %r; storing it without one.", submission_id, raw
        )
        return None


__all__ = ["normalize_submission"]
