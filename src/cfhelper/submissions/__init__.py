"""Persistent, deduplicated history of a user's submissions."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Any, Iterable, Literal, Mapping

from .errors import StoreError
from .ingest import normalize_submission
from .models import SubmissionRecord, Verdict

LOGGER = logging.getLogger(__name__)

ProblemStatus = Literal["OK", "WRONG"]

_SCHEMA = """
CREATE TABLE IF NOT EXISTS submissions (
    id INTEGER PRIMARY KEY,
    creation_time_seconds INTEGER NOT NULL,
    verdict TEXT,
    record TEXT NOT NULL,
    code TEXT
);
CREATE INDEX IF NOT EXISTS submissions_by_creation
    ON submissions (creation_time_seconds, id);
CREATE TABLE IF NOT EXISTS store_meta (
    key TEXT PRIMARY KEY,
    value INTEGER NOT NULL
);
INSERT OR IGNORE INTO store_meta (key, value) VALUES ('count', 0);
"""


class SubmissionStore:
    """SQLite-backed store keyed by submission id and ordered by creation time.

    The record count is kept in ``store_meta`` and updated in the same
    transaction as every write, so ``count`` never scans the table.
    """

    def __init__(self, path: Path | str) -> None:
        """Open (and create if needed) the database at ``path``.

        Raises:
            StoreError: If the database cannot be opened or initialized.
        """
        self._path = Path(path)
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(self._path)
            self._conn.row_factory = sqlite3.Row
            self._conn.executescript(_SCHEMA)
        except (OSError, sqlite3.Error) as exc:
            raise StoreError(f"Cannot open submission store at {self._path}: {exc}") from exc

    @property
    def path(self) -> Path:
        return self._path

    def __enter__(self) -> "SubmissionStore":
        return self

    def __exit__(self, *_: object) -> None:
        self.close()

    def close(self) -> None:
        self._conn.close()

    def merge(self, raw_records: Iterable[Mapping[str, Any]]) -> int:
        """Upsert a batch of raw ``user.status`` entries.

        Entries without a usable problem reference are skipped. When a stored
        record already has ``code`` and the incoming one does not, the stored
        code is kept. The batch is applied in a single transaction.

        Args:
            raw_records: Submissions in the API wire shape.

        Returns:
            int: Number of records inserted or updated.

        Raises:
            StoreError: If the transaction fails; no part of the batch is applied.
        """
        records = [
            record
            for record in (normalize_submission(raw) for raw in raw_records)
            if record is not None
        ]
        if not records:
            return 0

        try:
            with self._conn:
                inserted = sum(self._upsert(record) for record in records)
                self._conn.execute(
                    "UPDATE store_meta SET value = value + ? WHERE key = 'count'", (inserted,)
                )
        except sqlite3.Error as exc:
            raise StoreError(f"Failed to merge submissions: {exc}") from exc

        LOGGER.info("Merged %d submissions (%d new).", len(records), inserted)
        return len(records)

    def count(self) -> int:
        """Return the number of stored records."""
        row = self._conn.execute("SELECT value FROM store_meta WHERE key = 'count'").fetchone()
        return int(row["value"]) if row else 0

    def recent(self, limit: int) -> list[SubmissionRecord]:
        """Return up to ``limit`` records, newest first."""
        if limit <= 0:
            return []
        cursor = self._conn.execute(
            "SELECT record, code FROM submissions "
            "ORDER BY creation_time_seconds DESC, id DESC LIMIT ?",
            (limit,),
        )
        return [self._to_record(row) for row in cursor]

    def query(self, *, only_accepted: bool = False) -> list[SubmissionRecord]:
        """Return every record in ascending creation order.

        Args:
            only_accepted: Restrict the result to verdict ``OK``.
        """
        sql = "SELECT record, code FROM submissions"
        params: tuple[Any, ...] = ()
        if only_accepted:
            sql += " WHERE verdict = ?"
            params = (Verdict.OK.value,)
        sql += " ORDER BY creation_time_seconds ASC, id ASC"
        return [self._to_record(row) for row in self._conn.execute(sql, params)]

    def get(self, submission_id: int) -> SubmissionRecord | None:
        row = self._conn.execute(
            "SELECT record, code FROM submissions WHERE id = ?", (submission_id,)
        ).fetchone()
        return self._to_record(row) if row else None

    def clear(self) -> None:
        """Remove every record."""
        try:
            with self._conn:
                self._conn.execute("DELETE FROM submissions")
                self._conn.execute("UPDATE store_meta SET value = 0 WHERE key = 'count'")
        except sqlite3.Error as exc:
            raise StoreError(f"Failed to clear submissions: {exc}") from exc

    def status_map(self) -> dict[str, ProblemStatus]:
        """Return ``OK`` for problems with an accepted submission, else ``WRONG``."""
        status: dict[str, ProblemStatus] = {}
        for record in self.query():
            if record.accepted:
                status[record.problem_id] = "OK"
            else:
                status.setdefault(record.problem_id, "WRONG")
        return status

    def solved_ids(self) -> set[str]:
        """Return the ids of problems with at least one accepted submission."""
        return {record.problem_id for record in self.query(only_accepted=True)}

    def _upsert(self, record: SubmissionRecord) -> int:
        existing = self._conn.execute(
            "SELECT code FROM submissions WHERE id = ?", (record.id,)
        ).fetchone()
        code = record.code
        if code is None and existing is not None:
            code = existing["code"]
        self._conn.execute(
            "INSERT OR REPLACE INTO submissions "
            "(id, creation_time_seconds, verdict, record, code) VALUES (?, ?, ?, ?, ?)",
            (
                record.id,
                record.creation_time_seconds,
                record.verdict.value if record.verdict else None,
                record.model_dump_json(by_alias=True, exclude={"code"}),
                code,
            ),
        )
        return 0 if existing is not None else 1

    @staticmethod
    def _to_record(row: sqlite3.Row) -> SubmissionRecord:
        record = SubmissionRecord.model_validate_json(row["record"])
        return record.model_copy(update={"code": row["code"]})


__all__ = [
    "SubmissionStore",
    "SubmissionRecord",
    "Verdict",
    "StoreError",
    "ProblemStatus",
    "normalize_submission",
]
