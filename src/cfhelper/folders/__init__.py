"""User-owned problem folders."""

from __future__ import annotations

import json
import logging
import uuid
from typing import Callable, Optional

from pydantic import ValidationError

from cfhelper.catalog import Catalog
from cfhelper.state import MissingStateError, StateRepository
from cfhelper.state.models import Folder, Problem

from .errors import DuplicateProblemError, FolderError, FolderNotFoundError
from .references import parse_problem_reference

LOGGER = logging.getLogger(__name__)

DEFAULT_FOLDER_ID = "fav_def"
DEFAULT_FOLDER_TITLE = "My Favorites"
IMPORTED_PROBLEM_NAME = "Imported"


def _new_folder_id() -> str:
    return f"f_{uuid.uuid4().hex[:12]}"


class FolderRepository:
    """Create, edit, and persist custom folders.

    Every mutation is written to ``folders.json`` before it returns.
    """

    def __init__(
        self,
        repository: StateRepository,
        *,
        id_factory: Callable[[], str] = _new_folder_id,
    ) -> None:
        self._repository = repository
        self._id_factory = id_factory
        self._folders: list[Folder] = []

    def load(self) -> None:
        """Load persisted folders, seeding ``My Favorites`` when none exist.

        Raises:
            StateError: If the stored folder data is unreadable.
        """
        try:
            folders = self._repository.load_folders()
        except MissingStateError:
            folders = []
        if not folders:
            folders = [Folder(id=DEFAULT_FOLDER_ID, title=DEFAULT_FOLDER_TITLE, is_custom=True)]
        self._folders = [folder.model_copy(update={"is_custom": True}) for folder in folders]

    def list_folders(self) -> list[Folder]:
        return list(self._folders)

    def get(self, folder_id: str) -> Folder:
        """Return the folder with ``folder_id``.

        Raises:
            FolderNotFoundError: If no such folder exists.
        """
        for folder in self._folders:
            if folder.id == folder_id:
                return folder
        raise FolderNotFoundError(f"No folder with id {folder_id!r}.")

    def create(self, title: str) -> Folder:
        """Append a new empty folder titled ``title``."""
        folder = Folder(id=self._id_factory(), title=self._clean_title(title), is_custom=True)
        self._commit([*self._folders, folder])
        return folder

    def rename(self, folder_id: str, title: str) -> Folder:
        folder = self.get(folder_id).model_copy(update={"title": self._clean_title(title)})
        self._swap(folder)
        return folder

    def delete(self, folder_id: str) -> None:
        folder = self.get(folder_id)
        self._commit([item for item in self._folders if item is not folder])

    def add_problem(self, folder_id: str, problem: Problem) -> Folder:
        """Append ``problem`` to a folder.

        Raises:
            FolderNotFoundError: If the folder does not exist.
            DuplicateProblemError: If the folder already holds the problem.
        """
        folder = self.get(folder_id)
        if folder.contains(problem.id):
            raise DuplicateProblemError(f"{problem.id} is already in {folder.title!r}.")
        updated = folder.model_copy(update={"problems": [*folder.problems, problem]})
        self._swap(updated)
        return updated

    def remove_problem(self, folder_id: str, problem_id: str) -> bool:
        """Remove ``problem_id`` from a folder; return False when it was absent."""
        folder = self.get(folder_id)
        remaining = [problem for problem in folder.problems if problem.id != problem_id]
        if len(remaining) == len(folder.problems):
            return False
        self._swap(folder.model_copy(update={"problems": remaining}))
        return True

    def import_text(self, text: str, catalog: Optional[Catalog] = None) -> Folder:
        """Create a folder from pasted text.

        The first non-empty line is the folder title; each following line is
        searched for a problem reference. Ids known to ``catalog`` resolve to
        the full problem, others are kept with a placeholder name.

        Raises:
            FolderError: If ``text`` has no title line.
        """
        lines = [line.strip() for line in text.splitlines() if line.strip()]
        if not lines:
            raise FolderError("Nothing to import: the text is empty.")

        problems: list[Problem] = []
        seen: set[str] = set()
        for line in lines[1:]:
            problem_id = parse_problem_reference(line)
            if problem_id is None or problem_id in seen:
                continue
            seen.add(problem_id)
            known = catalog.get(problem_id) if catalog is not None else None
            problems.append(known or Problem(id=problem_id, name=IMPORTED_PROBLEM_NAME))

        folder = Folder(id=self._id_factory(), title=lines[0], problems=problems, is_custom=True)
        self._commit([*self._folders, folder])
        LOGGER.info("Imported folder %r with %d problems.", folder.title, len(problems))
        return folder

    def backup(self) -> bytes:
        """Serialize every folder as a JSON array."""
        payload = [folder.model_dump(mode="json", by_alias=True) for folder in self._folders]
        return json.dumps(payload, ensure_ascii=False, indent=2).encode("utf-8")

    def restore(self, data: bytes | str) -> list[Folder]:
        """Replace all folders with the contents of a ``backup`` payload.

        Raises:
            FolderError: If ``data`` is not a JSON array of folders.
        """
        try:
            payload = json.loads(data)
        except json.JSONDecodeError as exc:
            raise FolderError(f"Backup is not valid JSON: {exc}") from exc
        if not isinstance(payload, list):
            raise FolderError("Backup must contain a JSON array of folders.")
        try:
            folders = [Folder.model_validate(item) for item in payload]
        except ValidationError as exc:
            raise FolderError(f"Backup contains an invalid folder: {exc}") from exc

        self._commit([folder.model_copy(update={"is_custom": True}) for folder in folders])
        return self.list_folders()

    def _commit(self, folders: list[Folder]) -> None:
        # memory only changes once the new list is on disk
        self._repository.save_folders(folders)
        self._folders = folders

    def _swap(self, updated: Folder) -> None:
        self._commit([updated if folder.id == updated.id else folder for folder in self._folders])

    @staticmethod
    def _clean_title(title: str) -> str:
        cleaned = title.strip()
        if not cleaned:
            raise FolderError("Folder title cannot be empty.")
        return cleaned


__all__ = [
    "FolderRepository",
    "DEFAULT_FOLDER_ID",
    "DEFAULT_FOLDER_TITLE",
    "IMPORTED_PROBLEM_NAME",
    "FolderError",
    "FolderNotFoundError",
    "DuplicateProblemError",
    "parse_problem_reference",
]
