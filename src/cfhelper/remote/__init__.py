"""Codeforces API access."""

from .client import DEFAULT_BASE_URL, CodeforcesClient
from .errors import NetworkError, RemoteError, RemoteStatusError
from .models import WireProblem, WireSubmission

__all__ = [
    "CodeforcesClient",
    "DEFAULT_BASE_URL",
    "RemoteError",
    "NetworkError",
    "RemoteStatusError",
    "WireProblem",
    "WireSubmission",
]
