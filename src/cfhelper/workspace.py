"""Wire configuration into the stores and clients used by CLI commands."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Optional

from cfhelper.catalog import Catalog
from cfhelper.catalog.classifier import TagClassifier
from cfhelper.config import CFHelperConfig
from cfhelper.folders import FolderRepository
from cfhelper.remote import CodeforcesClient
from cfhelper.state import StateRepository
from cfhelper.submissions import SubmissionStore


def build_client(config: CFHelperConfig) -> CodeforcesClient:
    """Return an API client configured from ``config.api``."""
    return CodeforcesClient(config.api.base_url, timeout=config.api.timeout_seconds)


@dataclass
class Workspace:
    """Lazily opened stores rooted at ``config.storage.data_dir``.

    Attributes:
        config: Effective configuration.
        repository: JSON state repository for the catalog and folders.
    """

    config: CFHelperConfig
    repository: StateRepository = field(init=False)
    _client: Optional[CodeforcesClient] = field(default=None, init=False, repr=False)
    _catalog: Optional[Catalog] = field(default=None, init=False, repr=False)
    _folders: Optional[FolderRepository] = field(default=None, init=False, repr=False)
    _store: Optional[SubmissionStore] = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        self.repository = StateRepository(self.config.storage.data_dir)

    @property
    def catalog_ttl(self) -> timedelta:
        return timedelta(hours=self.config.catalog.ttl_hours)

    def client(self) -> CodeforcesClient:
        if self._client is None:
            self._client = build_client(self.config)
        return self._client

    def catalog(self) -> Catalog:
        """Return the catalog loaded from disk."""
        if self._catalog is None:
            classifier = TagClassifier(
                self.config.catalog.tags, limit=self.config.catalog.folder_size
            )
            self._catalog = Catalog(self.repository, self.client(), classifier)
            self._catalog.load()
        return self._catalog

    def folders(self) -> FolderRepository:
        if self._folders is None:
            self._folders = FolderRepository(self.repository)
            self._folders.load()
        return self._folders

    def store(self) -> SubmissionStore:
        if self._store is None:
            self._store = SubmissionStore(self.repository.submissions_path)
        return self._store

    def close(self) -> None:
        if self._store is not None:
            self._store.close()
            self._store = None
        if self._client is not None:
            self._client.close()
            self._client = None


__all__ = ["Workspace", "build_client"]
