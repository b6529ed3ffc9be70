"""Wire shapes returned by the Codeforces API.

These models only validate what the API sends. Conversion into domain
objects happens in the catalog and submission ingestion modules.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class WireModel(BaseModel):
    """Base for API payloads; unknown fields are ignored."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class WireProblem(WireModel):
    contest_id: Optional[int] = Field(default=None, alias="contestId")
    index: Optional[str] = None
    name: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    rating: Optional[int] = None


class WireSubmission(WireModel):
    id: int
    problem: Optional[WireProblem] = None
    programming_language: str = Field(default="", alias="programmingLanguage")
    verdict: Optional[str] = None
    testset: str = ""
    passed_test_count: int = Field(default=0, alias="passedTestCount")
    time_consumed_millis: int = Field(default=0, alias="timeConsumedMillis")
    memory_consumed_bytes: int = Field(default=0, alias="memoryConsumedBytes")
    creation_time_seconds: int = Field(alias="creationTimeSeconds")
    code: Optional[str] = None


__all__ = ["WireModel", "WireProblem", "WireSubmission"]
