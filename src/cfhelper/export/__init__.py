"""Render submission history as CSV or JSON downloads."""

from __future__ import annotations

import json
import math
from datetime import datetime
from enum import Enum
from typing import Iterable, Sequence

from cfhelper.submissions import SubmissionStore
from cfhelper.submissions.models import SubmissionRecord, Verdict

CSV_HEADER = (
    "Submission ID",
    "Contest",
    "Index",
    "Problem Name",
    "Rating",
    "Verdict",
    "Language",
    "Time (ms)",
    "Memory (KB)",
    "Date Time",
)
BOM = "\ufeff"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_VERDICTS_WITH_TEST = frozenset(
    {
        Verdict.WRONG_ANSWER,
        Verdict.TIME_LIMIT_EXCEEDED,
        Verdict.MEMORY_LIMIT_EXCEEDED,
        Verdict.RUNTIME_ERROR,
    }
)


class ExportFormat(str, Enum):
    CSV = "csv"
    JSON = "json"


class ExportError(Exception):
    """Base exception for export failures."""


class NothingToExportError(ExportError):
    """Raised when the selection contains no submissions."""


def humanize_verdict(verdict: Verdict | None) -> str:
    """Return ``TIME_LIMIT_EXCEEDED`` as ``Time Limit Exceeded``."""
    if verdict is None:
        return ""
    return verdict.value.replace("_", " ").title()


def verdict_text(record: SubmissionRecord) -> str:
    """Return the verdict column for ``record``, e.g. ``Wrong Answer on test 3``."""
    if record.verdict is Verdict.OK:
        return "Accepted"
    if record.verdict is Verdict.COMPILATION_ERROR:
        return "Compilation Error"
    text = humanize_verdict(record.verdict)
    if record.verdict in _VERDICTS_WITH_TEST:
        text += f" on test {record.passed_test_count + 1}"
    return text


def memory_kb(memory_bytes: int) -> int:
    """Convert bytes to kilobytes, rounding half up and never below zero."""
    return max(0, math.floor(memory_bytes / 1024 + 0.5))


def format_timestamp(seconds: int) -> str:
    """Return ``seconds`` since the epoch as local ``YYYY-MM-DD HH:MM:SS``."""
    return datetime.fromtimestamp(seconds).strftime(DATE_FORMAT)


def quote(text: str) -> str:
    """Wrap ``text`` in double quotes, doubling any embedded quote."""
    return '"' + text.replace('"', '""') + '"'


def csv_row(record: SubmissionRecord) -> str:
    cells = [
        str(record.id),
        str(record.contest_id),
        record.index,
        quote(record.name),
        "" if record.rating is None else str(record.rating),
        quote(verdict_text(record)),
        quote(record.programming_language),
        str(record.time_consumed_millis),
        str(memory_kb(record.memory_consumed_bytes)),
        quote(format_timestamp(record.creation_time_seconds)),
    ]
    return ",".join(cells)


def render_csv(records: Iterable[SubmissionRecord]) -> str:
    """Render ``records`` in the given order, header first, BOM-prefixed."""
    lines = [",".join(CSV_HEADER)]
    lines.extend(csv_row(record) for record in records)
    return BOM + "\n".join(lines) + "\n"


def render_json(records: Iterable[SubmissionRecord]) -> str:
    """Render ``records`` as a pretty-printed array using the API field names."""
    payload = [
        record.model_dump(mode="json", by_alias=True, exclude_none=True) for record in records
    ]
    return json.dumps(payload, ensure_ascii=False, indent=2)


def export_records(
    records: Sequence[SubmissionRecord],
    fmt: ExportFormat | str,
    *,
    only_accepted: bool = False,
) -> bytes:
    """Export records given in ascending creation order, newest first.

    Args:
        records: Records as returned by ``SubmissionStore.query``.
        fmt: ``csv`` or ``json``.
        only_accepted: Drop records whose verdict is not ``OK``.

    Returns:
        bytes: UTF-8 encoded document.

    Raises:
        NothingToExportError: If no record is left to export.
        ValueError: If ``fmt`` is not a known format.
    """
    export_format = ExportFormat(fmt)
    selected = [record for record in records if record.accepted or not only_accepted]
    if not selected:
        raise NothingToExportError("There are no submissions to export.")
    selected.reverse()

    if export_format is ExportFormat.CSV:
        return render_csv(selected).encode("utf-8")
    return render_json(selected).encode("utf-8")


def export_submissions(
    store: SubmissionStore,
    fmt: ExportFormat | str,
    *,
    only_accepted: bool = False,
) -> bytes:
    """Query ``store`` and export the result newest first."""
    return export_records(store.query(only_accepted=only_accepted), fmt)


def default_filename(fmt: ExportFormat | str, *, only_accepted: bool = False) -> str:
    """Return the suggested download name, e.g. ``cf_submissions_ac.csv``."""
    suffix = "_ac" if only_accepted else ""
    return f"cf_submissions{suffix}.{ExportFormat(fmt).value}"


__all__ = [
    "CSV_HEADER",
    "ExportFormat",
    "ExportError",
    "NothingToExportError",
    "humanize_verdict",
    "verdict_text",
    "memory_kb",
    "format_timestamp",
    "render_csv",
    "render_json",
    "export_records",
    "export_submissions",
    "default_filename",
]
