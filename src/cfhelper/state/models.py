"""Persisted data models shared by the catalog and folder layers."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CamelModel(BaseModel):
    """Base model persisted with camelCase field names."""

    model_config = ConfigDict(populate_by_name=True)


class Problem(CamelModel):
    """A catalog problem identified by ``f"{contest_id}{index}"``."""

    id: str
    name: str
    tags: List[str] = Field(default_factory=list)
    rating: Optional[int] = None
    contest_id: Optional[int] = Field(default=None, alias="contestId")
    index: Optional[str] = None


class Folder(CamelModel):
    """Ordered, named collection of problems.

    Attributes:
        id: Stable identifier (``sys_<tag>`` for system folders).
        title: Display title.
        problems: Problems in insertion order; ids are unique within a folder.
        is_custom: Whether the folder is user-owned.
    """

    id: str
    title: str
    problems: List[Problem] = Field(default_factory=list)
    is_custom: bool = Field(default=False, alias="isCustom")

    def contains(self, problem_id: str) -> bool:
        """Return True when a problem with ``problem_id`` is already in the folder."""
        return any(problem.id == problem_id for problem in self.problems)


class CacheMeta(CamelModel):
    """Fetch metadata attached to a catalog snapshot."""

    fetched_at: datetime = Field(alias="fetchedAt")


class CatalogSnapshot(CamelModel):
    """Everything written to ``catalog.json`` by a successful refresh."""

    meta: Optional[CacheMeta] = None
    problems: List[Problem] = Field(default_factory=list)
    system_folders: List[Folder] = Field(default_factory=list, alias="systemFolders")


__all__ = ["CamelModel", "Problem", "Folder", "CacheMeta", "CatalogSnapshot"]
