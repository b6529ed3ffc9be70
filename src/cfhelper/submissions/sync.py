"""Pull a user's submissions from the API into the local store."""

from __future__ import annotations

import logging

from cfhelper.remote import CodeforcesClient

from . import SubmissionStore

LOGGER = logging.getLogger(__name__)


def sync_submissions(client: CodeforcesClient, store: SubmissionStore, handle: str) -> int:
    """Fetch every submission of ``handle`` and merge it into ``store``.

    Returns:
        int: Number of records upserted.

    Raises:
        NetworkError: If the API cannot be reached.
        RemoteStatusError: If the API rejects the request (unknown handle).
        StoreError: If the merge transaction fails.
    """
    LOGGER.info("Syncing submissions for %s", handle)
    raw = client.fetch_user_status(handle)
    return store.merge(raw)


__all__ = ["sync_submissions"]
