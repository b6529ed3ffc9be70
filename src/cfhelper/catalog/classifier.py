"""Derive per-tag system folders from the catalog."""

from __future__ import annotations

from typing import Sequence

from cfhelper.config.models import DEFAULT_TAGS
from cfhelper.state.models import Folder, Problem

SYSTEM_FOLDER_PREFIX = "sys_"
DEFAULT_FOLDER_SIZE = 20


class TagClassifier:
    """Build one system folder per registered tag.

    Each folder holds the ``limit`` most recent problems carrying the tag,
    where recency is the contest id. Classification is recomputed from
    scratch for every catalog snapshot.
    """

    def __init__(self, tags: Sequence[str] = DEFAULT_TAGS, *, limit: int = DEFAULT_FOLDER_SIZE):
        self.tags = list(tags)
        self.limit = limit

    def classify(self, problems: Sequence[Problem]) -> list[Folder]:
        """Return system folders for ``problems`` in registry order."""
        folders = []
        for tag in self.tags:
            tagged = [problem for problem in problems if tag in problem.tags]
            # sorted() is stable, so ties keep catalog order
            tagged = sorted(tagged, key=lambda p: p.contest_id or 0, reverse=True)
            folders.append(self._folder(tag, tagged[: self.limit]))
        return folders

    def empty_folders(self) -> list[Folder]:
        """Return the placeholder folders shown before the first refresh."""
        return [self._folder(tag, []) for tag in self.tags]

    @staticmethod
    def _folder(tag: str, problems: list[Problem]) -> Folder:
        return Folder(
            id=f"{SYSTEM_FOLDER_PREFIX}{tag}",
            title=tag.upper(),
            problems=problems,
            is_custom=False,
        )


__all__ = ["TagClassifier", "SYSTEM_FOLDER_PREFIX", "DEFAULT_FOLDER_SIZE"]
