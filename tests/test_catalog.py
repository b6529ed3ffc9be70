"""Catalog ingestion, refresh, and staleness tests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import pytest

from cfhelper.catalog import CATALOG_TTL, Catalog, TagClassifier, normalize_problems
from cfhelper.remote import NetworkError
from cfhelper.state import StateError, StateRepository

NOW = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)

RAW_PROBLEMS: list[dict[str, Any]] = [
    {"contestId": 1850, "index": "A", "name": "To My Critics", "tags": ["implementation"], "rating": 800},
    {"contestId": 4, "index": "A", "name": "Watermelon", "tags": ["brute force", "math"], "rating": 800},
    {"contestId": 4, "index": "A", "name": "Watermelon (duplicate)", "tags": []},
    {"index": "B", "name": "No contest", "tags": ["math"]},
    {"contestId": 1950, "index": "F2", "name": "Hard version", "tags": ["dp", "math"]},
]


class StubClient:
    """Return a canned problem list or raise a configured error."""

    def __init__(self, problems: list[dict[str, Any]], error: Exception | None = None) -> None:
        self.problems = problems
        self.error = error
        self.calls = 0

    def fetch_problemset(self) -> list[dict[str, Any]]:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.problems


def _catalog(tmp_path: Path, client: Any = None, *, now: datetime = NOW) -> Catalog:
    return Catalog(
        StateRepository(tmp_path),
        client,
        TagClassifier(["math", "dp", "greedy"]),
        clock=lambda: now,
    )


def test_normalize_problems_derives_ids_and_drops_unusable_entries() -> None:
    problems = normalize_problems(RAW_PROBLEMS)

    assert [problem.id for problem in problems] == ["1850A", "4A", "1950F2"]
    # first occurrence wins
    assert problems[1].name == "Watermelon"
    assert problems[2].rating is None


def test_load_without_snapshot_is_empty_and_stale(tmp_path: Path) -> None:
    catalog = _catalog(tmp_path)

    catalog.load()

    assert len(catalog) == 0
    assert catalog.fetched_at is None
    assert catalog.is_stale()
    assert [folder.id for folder in catalog.system_folders] == ["sys_math", "sys_dp", "sys_greedy"]
    assert all(not folder.problems for folder in catalog.system_folders)


def test_refresh_replaces_and_persists_snapshot(tmp_path: Path) -> None:
    client = StubClient(RAW_PROBLEMS)
    catalog = _catalog(tmp_path, client)

    count = catalog.refresh()

    assert count == 3
    assert catalog.fetched_at == NOW
    assert catalog.get("1950F2") is not None
    math = catalog.system_folders[0]
    assert [problem.id for problem in math.problems] == ["1950F2", "4A"]

    reloaded = _catalog(tmp_path)
    reloaded.load()
    assert [problem.id for problem in reloaded.problems] == ["1850A", "4A", "1950F2"]
    assert reloaded.fetched_at == NOW
    assert reloaded.system_folders == catalog.system_folders


def test_failed_refresh_keeps_previous_snapshot(tmp_path: Path) -> None:
    _catalog(tmp_path, StubClient(RAW_PROBLEMS)).refresh()

    catalog = _catalog(tmp_path, StubClient([], error=NetworkError("offline")))
    catalog.load()
    with pytest.raises(NetworkError):
        catalog.refresh()

    assert len(catalog) == 3
    reloaded = _catalog(tmp_path)
    reloaded.load()
    assert len(reloaded) == 3


def test_refresh_without_client_is_an_error(tmp_path: Path) -> None:
    with pytest.raises(RuntimeError):
        _catalog(tmp_path).refresh()


def test_is_stale_after_ttl(tmp_path: Path) -> None:
    _catalog(tmp_path, StubClient(RAW_PROBLEMS)).refresh()

    fresh = _catalog(tmp_path, now=NOW + CATALOG_TTL)
    fresh.load()
    stale = _catalog(tmp_path, now=NOW + CATALOG_TTL + timedelta(seconds=1))
    stale.load()

    assert not fresh.is_stale()
    assert stale.is_stale()
    assert not stale.is_stale(timedelta(hours=48))


def test_load_reclassifies_when_tag_registry_changes(tmp_path: Path) -> None:
    _catalog(tmp_path, StubClient(RAW_PROBLEMS)).refresh()

    catalog = Catalog(StateRepository(tmp_path), classifier=TagClassifier(["implementation"]))
    catalog.load()

    assert [folder.id for folder in catalog.system_folders] == ["sys_implementation"]
    assert [problem.id for problem in catalog.system_folders[0].problems] == ["1850A"]


def test_corrupt_snapshot_raises_state_error(tmp_path: Path) -> None:
    (tmp_path / "catalog.json").write_text("[]", encoding="utf-8")

    with pytest.raises(StateError):
        _catalog(tmp_path).load()


def test_refresh_reports_unwritable_snapshot_as_state_error(tmp_path: Path) -> None:
    occupied = tmp_path / "data"
    occupied.write_text("", encoding="utf-8")
    catalog = Catalog(StateRepository(occupied), StubClient(RAW_PROBLEMS), clock=lambda: NOW)

    with pytest.raises(StateError):
        catalog.refresh()

    assert len(catalog) == 0


def test_load_applies_current_folder_size(tmp_path: Path) -> None:
    _catalog(tmp_path, StubClient(RAW_PROBLEMS)).refresh()

    catalog = Catalog(StateRepository(tmp_path), classifier=TagClassifier(["math"], limit=1))
    catalog.load()

    assert [problem.id for problem in catalog.system_folders[0].problems] == ["1950F2"]
