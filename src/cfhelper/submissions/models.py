"""Submission record model persisted by the submission store."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Verdict(str, Enum):
    """Verdicts reported by the Codeforces API."""

    FAILED = "FAILED"
    OK = "OK"
    PARTIAL = "PARTIAL"
    COMPILATION_ERROR = "COMPILATION_ERROR"
    RUNTIME_ERROR = "RUNTIME_ERROR"
    WRONG_ANSWER = "WRONG_ANSWER"
    PRESENTATION_ERROR = "PRESENTATION_ERROR"
    TIME_LIMIT_EXCEEDED = "TIME_LIMIT_EXCEEDED"
    MEMORY_LIMIT_EXCEEDED = "MEMORY_LIMIT_EXCEEDED"
    IDLENESS_LIMIT_EXCEEDED = "IDLENESS_LIMIT_EXCEEDED"
    SECURITY_VIOLATED = "SECURITY_VIOLATED"
    CRASHED = "CRASHED"
    INPUT_PREPARATION_CRASHED = "INPUT_PREPARATION_CRASHED"
    CHALLENGED = "CHALLENGED"
    SKIPPED = "SKIPPED"
    TESTING = "TESTING"
    REJECTED = "REJECTED"


class SubmissionRecord(BaseModel):
    """A locally stored submission, flattened with its problem fields.

    ``code`` is filled in by tooling outside the sync path and survives
    re-syncs that do not carry it.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: int
    contest_id: int = Field(alias="contestId")
    index: str
    name: str
    rating: Optional[int] = None
    tags: List[str] = Field(default_factory=list)
    programming_language: str = Field(default="", alias="programmingLanguage")
    verdict: Optional[Verdict] = None
    testset: str = ""
    passed_test_count: int = Field(default=0, alias="passedTestCount")
    time_consumed_millis: int = Field(default=0, alias="timeConsumedMillis")
    memory_consumed_bytes: int = Field(default=0, alias="memoryConsumedBytes")
    creation_time_seconds: int = Field(alias="creationTimeSeconds")
    code: Optional[str] = None

    @property
    def problem_id(self) -> str:
        return f"{self.contest_id}{self.index}"

    @property
    def accepted(self) -> bool:
        return self.verdict is Verdict.OK


__all__ = ["Verdict", "SubmissionRecord"]
