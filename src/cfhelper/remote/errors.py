"""Errors raised at the remote API boundary."""


class RemoteError(Exception):
    """Base exception for remote API failures."""


class NetworkError(RemoteError):
    """Raised when the API cannot be reached or returns an unreadable body."""


class RemoteStatusError(RemoteError):
    """Raised when the API answers with a non-``OK`` status.

    Attributes:
        method: API method that failed (for example ``user.status``).
        comment: Explanation supplied by the API.
    """

    def __init__(self, method: str, comment: str) -> None:
        super().__init__(f"{method} failed: {comment}")
        self.method = method
        self.comment = comment
