"""State persistence errors."""


class StateError(Exception):
    """Base exception for state repository operations."""


class MissingStateError(StateError):
    """Raised when a requested snapshot has never been written."""
