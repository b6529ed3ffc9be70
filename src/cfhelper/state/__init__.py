"""On-disk persistence for the catalog snapshot and custom folders."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from .errors import MissingStateError, StateError
from .models import CacheMeta, CatalogSnapshot, Folder, Problem

DEFAULT_DATA_DIR = Path("~/.cfhelper")
CATALOG_FILENAME = "catalog.json"
FOLDERS_FILENAME = "folders.json"
SUBMISSIONS_FILENAME = "submissions.sqlite3"


class StateRepository:
    """Manage the files stored under the cfhelper data directory."""

    def __init__(self, data_dir: Path | str = DEFAULT_DATA_DIR) -> None:
        """Initialize the repository.

        Args:
            data_dir: Directory that holds every persisted artifact.
        """
        self._data_dir = Path(data_dir).expanduser()

    @property
    def data_dir(self) -> Path:
        """Return the directory holding persisted state."""
        return self._data_dir

    @property
    def submissions_path(self) -> Path:
        """Return the path of the SQLite submission database."""
        return self._data_dir / SUBMISSIONS_FILENAME

    def initialize(self) -> Path:
        """Create the data directory if needed and return it.

        Raises:
            StateError: If the directory cannot be created.
        """
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StateError(f"Cannot create data directory {self._data_dir}: {exc}") from exc
        return self._data_dir

    def load_catalog(self) -> CatalogSnapshot:
        """Load the persisted catalog snapshot.

        Returns:
            CatalogSnapshot: Problems, system folders, and fetch metadata.

        Raises:
            MissingStateError: If no snapshot has been written yet.
            StateError: If the stored data cannot be parsed.
        """
        data = self._read_json(self._data_dir / CATALOG_FILENAME)
        try:
            return CatalogSnapshot.model_validate(data)
        except ValidationError as exc:
            raise StateError(f"Invalid catalog snapshot: {exc}") from exc

    def save_catalog(self, snapshot: CatalogSnapshot) -> None:
        """Atomically replace the persisted catalog snapshot."""
        self._write_json(
            self._data_dir / CATALOG_FILENAME,
            snapshot.model_dump(mode="json", by_alias=True),
        )

    def load_folders(self) -> list[Folder]:
        """Load the persisted custom folders.

        Raises:
            MissingStateError: If folders were never saved.
            StateError: If the stored data is not a valid folder list.
        """
        data = self._read_json(self._data_dir / FOLDERS_FILENAME)
        if not isinstance(data, list):
            raise StateError("Folder data must be a JSON array.")
        try:
            return [Folder.model_validate(item) for item in data]
        except ValidationError as exc:
            raise StateError(f"Invalid folder data: {exc}") from exc

    def save_folders(self, folders: list[Folder]) -> None:
        """Atomically replace the persisted custom folders."""
        self._write_json(
            self._data_dir / FOLDERS_FILENAME,
            [folder.model_dump(mode="json", by_alias=True) for folder in folders],
        )

    def _read_json(self, path: Path) -> Any:
        if not path.exists():
            raise MissingStateError(f"No state found at {path}")
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise StateError(f"Invalid JSON in {path.name}: {exc}") from exc
        except OSError as exc:
            raise StateError(f"Cannot read {path.name}: {exc}") from exc

    def _write_json(self, path: Path, payload: Any) -> None:
        directory = self.initialize()
        try:
            fd, tmp_name = tempfile.mkstemp(dir=directory, prefix=f".{path.name}.", suffix=".tmp")
        except OSError as exc:
            raise StateError(f"Cannot write {path.name}: {exc}") from exc
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(payload, handle, ensure_ascii=False, indent=2)
            os.replace(tmp_name, path)
        except OSError as exc:
            Path(tmp_name).unlink(missing_ok=True)
            raise StateError(f"Cannot write {path.name}: {exc}") from exc
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


__all__ = [
    "StateRepository",
    "DEFAULT_DATA_DIR",
    "CacheMeta",
    "CatalogSnapshot",
    "Folder",
    "Problem",
    "StateError",
    "MissingStateError",
]
