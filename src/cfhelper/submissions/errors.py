"""Submission store errors."""


class StoreError(Exception):
    """Raised when the submission database cannot be read or written."""
