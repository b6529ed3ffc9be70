"""Local cache of the Codeforces problem catalog."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from cfhelper.remote import CodeforcesClient
from cfhelper.state import MissingStateError, StateRepository
from cfhelper.state.models import CacheMeta, CatalogSnapshot, Folder, Problem

from .classifier import TagClassifier
from .ingest import make_problem_id, normalize_problem, normalize_problems

LOGGER = logging.getLogger(__name__)

CATALOG_TTL = timedelta(hours=24)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Catalog:
    """Hold the normalized problem snapshot and its fetch timestamp.

    The snapshot is only ever replaced as a whole: ``refresh`` builds the new
    problem list and system folders completely, persists them, and then swaps
    them in. A failed refresh leaves the previous snapshot authoritative.
    """

    def __init__(
        self,
        repository: StateRepository,
        client: Optional[CodeforcesClient] = None,
        classifier: Optional[TagClassifier] = None,
        *,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._repository = repository
        self._client = client
        self._classifier = classifier or TagClassifier()
        self._clock = clock
        self._problems: list[Problem] = []
        self._by_id: dict[str, Problem] = {}
        self._system_folders: list[Folder] = self._classifier.empty_folders()
        self._meta: Optional[CacheMeta] = None

    @property
    def problems(self) -> list[Problem]:
        """Return the problems of the current snapshot in remote order."""
        return list(self._problems)

    @property
    def system_folders(self) -> list[Folder]:
        """Return the per-tag folders derived from the current snapshot."""
        return list(self._system_folders)

    @property
    def fetched_at(self) -> Optional[datetime]:
        """Return when the current snapshot was fetched, if ever."""
        return self._meta.fetched_at if self._meta else None

    def __len__(self) -> int:
        return len(self._problems)

    def get(self, problem_id: str) -> Optional[Problem]:
        """Return the problem with ``problem_id`` or None."""
        return self._by_id.get(problem_id)

    def load(self) -> None:
        """Load the persisted snapshot; keep an empty catalog when there is none.

        Raises:
            StateError: If a snapshot exists but cannot be read.
        """
        try:
            snapshot = self._repository.load_catalog()
        except MissingStateError:
            LOGGER.debug("No catalog snapshot on disk; starting empty.")
            return

        # system folders follow the current tag registry and folder size
        folders = self._classifier.classify(snapshot.problems)
        self._install(snapshot.problems, folders, snapshot.meta)

    def refresh(self) -> int:
        """Fetch the full problem list and replace the snapshot.

        Returns:
            int: Number of problems in the new snapshot.

        Raises:
            NetworkError: If the API cannot be reached or the body is unreadable.
            RemoteStatusError: If the API reports a non-OK status.
            StateError: If the snapshot cannot be persisted.
        """
        if self._client is None:
            raise RuntimeError("Catalog.refresh requires a CodeforcesClient.")

        entries = self._client.fetch_problemset()
        problems = normalize_problems(entries)
        folders = self._classifier.classify(problems)
        meta = CacheMeta(fetched_at=self._clock())

        self._repository.save_catalog(
            CatalogSnapshot(meta=meta, problems=problems, system_folders=folders)
        )
        self._install(problems, folders, meta)
        LOGGER.info("Catalog refreshed with %d problems.", len(problems))
        return len(problems)

    def is_stale(self, ttl: timedelta = CATALOG_TTL) -> bool:
        """Return True when the snapshot is older than ``ttl`` or was never fetched."""
        if self._meta is None:
            return True
        fetched_at = self._meta.fetched_at
        if fetched_at.tzinfo is None:
            fetched_at = fetched_at.replace(tzinfo=timezone.utc)
        return self._clock() - fetched_at > ttl

    def _install(
        self, problems: list[Problem], folders: list[Folder], meta: Optional[CacheMeta]
    ) -> None:
        self._problems = problems
        self._by_id = {problem.id: problem for problem in problems}
        self._system_folders = folders
        self._meta = meta


__all__ = [
    "CATALOG_TTL",
    "Catalog",
    "TagClassifier",
    "make_problem_id",
    "normalize_problem",
    "normalize_problems",
]
