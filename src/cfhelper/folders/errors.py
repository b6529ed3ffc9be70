"""Custom folder errors."""


class FolderError(Exception):
    """Base exception for custom folder operations."""


class FolderNotFoundError(FolderError):
    """Raised when a folder id does not exist."""


class DuplicateProblemError(FolderError):
    """Raised when a problem is added to a folder that already holds it."""
