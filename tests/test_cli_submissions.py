"""CLI tests for `cfhelper submissions` and solved-aware random picks."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import httpx
import pytest
from click.testing import CliRunner

from cfhelper.cli import cli
from cfhelper.remote import CodeforcesClient

PROBLEMS = [
    {"contestId": 4, "index": "A", "name": "Watermelon", "tags": ["math"], "rating": 800},
    {"contestId": 71, "index": "A", "name": "Way Too Long Words", "tags": ["strings"], "rating": 800},
]

SUBMISSIONS = [
    {
        "id": 300,
        "problem": {"contestId": 4, "index": "A", "name": "Watermelon", "tags": ["math"], "rating": 800},
        "programmingLanguage": "Python 3",
        "verdict": "OK",
        "testset": "TESTS",
        "passedTestCount": 20,
        "timeConsumedMillis": 62,
        "memoryConsumedBytes": 0,
        "creationTimeSeconds": 1_700_000_300,
    },
    {
        "id": 200,
        "problem": {"contestId": 4, "index": "A", "name": "Watermelon", "tags": ["math"], "rating": 800},
        "programmingLanguage": "Python 3",
        "verdict": "WRONG_ANSWER",
        "testset": "TESTS",
        "passedTestCount": 4,
        "timeConsumedMillis": 46,
        "memoryConsumedBytes": 0,
        "creationTimeSeconds": 1_700_000_200,
    },
    {
        "id": 100,
        "problem": {"contestId": 71, "index": "A", "name": "Way Too Long Words", "tags": ["strings"]},
        "programmingLanguage": "GNU C++17",
        "verdict": "COMPILATION_ERROR",
        "testset": "TESTS",
        "passedTestCount": 0,
        "timeConsumedMillis": 0,
        "memoryConsumedBytes": 0,
        "creationTimeSeconds": 1_700_000_100,
    },
]


def _env_with_home(tmp_path: Path) -> dict[str, str]:
    env = {key: value for key, value in os.environ.items() if not key.startswith("CFHELPER__")}
    env["HOME"] = str(tmp_path / "home")
    return env


def _handler(request: httpx.Request) -> httpx.Response:
    if request.url.path.endswith("user.status"):
        if request.url.params["handle"] != "tourist":
            return httpx.Response(
                400, json={"status": "FAILED", "comment": "handle: User with handle nobody not found"}
            )
        return httpx.Response(200, json={"status": "OK", "result": SUBMISSIONS})
    return httpx.Response(200, json={"status": "OK", "result": {"problems": PROBLEMS}})


@pytest.fixture
def runner(monkeypatch: pytest.MonkeyPatch) -> CliRunner:
    def build(config: Any) -> CodeforcesClient:
        return CodeforcesClient(config.api.base_url, transport=httpx.MockTransport(_handler))

    monkeypatch.setattr("cfhelper.workspace.build_client", build)
    return CliRunner()


def test_sync_and_recent(runner: CliRunner, tmp_path: Path) -> None:
    env = _env_with_home(tmp_path)

    synced = runner.invoke(cli, ["submissions", "sync", "tourist", "--json"], env=env)
    again = runner.invoke(cli, ["submissions", "sync", "tourist", "--json"], env=env)
    recent = runner.invoke(cli, ["submissions", "recent", "--limit", "2", "--json"], env=env)
    count = runner.invoke(cli, ["submissions", "count"], env=env)

    assert json.loads(synced.output) == {"handle": "tourist", "merged": 3, "total": 3}
    assert json.loads(again.output)["total"] == 3
    assert [item["id"] for item in json.loads(recent.output)] == [300, 200]
    assert count.output.strip() == "3"


def test_sync_uses_configured_handle(runner: CliRunner, tmp_path: Path) -> None:
    env = _env_with_home(tmp_path)

    missing = runner.invoke(cli, ["submissions", "sync", "--json"], env=env)
    env["CFHELPER__USER__HANDLE"] = "tourist"
    configured = runner.invoke(cli, ["submissions", "sync", "--json"], env=env)

    assert missing.exit_code == 1
    assert json.loads(missing.output)["error"]["code"] == "missing_handle"
    assert configured.exit_code == 0
    assert json.loads(configured.output)["handle"] == "tourist"


def test_sync_unknown_handle_reports_comment(runner: CliRunner, tmp_path: Path) -> None:
    result = runner.invoke(cli, ["submissions", "sync", "nobody"], env=_env_with_home(tmp_path))

    assert result.exit_code != 0
    assert "not found" in result.output


def test_status_and_unsolved_random(runner: CliRunner, tmp_path: Path) -> None:
    env = _env_with_home(tmp_path)
    runner.invoke(cli, ["catalog", "refresh"], env=env)
    runner.invoke(cli, ["submissions", "sync", "tourist"], env=env)

    status = runner.invoke(cli, ["submissions", "status", "--json"], env=env)
    picks = {
        json.loads(runner.invoke(cli, ["random", "--unsolved", "--json"], env=env).output)["problem"]["id"]
        for _ in range(5)
    }

    assert json.loads(status.output) == {"4A": "OK", "71A": "WRONG"}
    assert picks == {"71A"}


def test_export_writes_csv_and_json(runner: CliRunner, tmp_path: Path) -> None:
    env = _env_with_home(tmp_path)
    runner.invoke(cli, ["submissions", "sync", "tourist"], env=env)
    csv_path = tmp_path / "out.csv"
    json_path = tmp_path / "out.json"

    csv_result = runner.invoke(cli, ["submissions", "export", "-o", str(csv_path)], env=env)
    json_result = runner.invoke(
        cli,
        ["submissions", "export", "--format", "json", "--only-accepted", "-o", str(json_path)],
        env=env,
    )

    assert csv_result.exit_code == 0
    assert json_result.exit_code == 0
    lines = csv_path.read_bytes().decode("utf-8-sig").splitlines()
    assert lines[0].startswith("Submission ID,Contest,Index")
    assert [line.split(",")[0] for line in lines[1:]] == ["300", "200", "100"]
    assert '"Wrong Answer on test 5"' in lines[2]
    assert '"Compilation Error"' in lines[3]
    assert [item["id"] for item in json.loads(json_path.read_text(encoding="utf-8"))] == [300]


def test_export_with_empty_store_writes_nothing(runner: CliRunner, tmp_path: Path) -> None:
    env = _env_with_home(tmp_path)
    target = tmp_path / "empty.csv"

    result = runner.invoke(cli, ["submissions", "export", "-o", str(target)], env=env)

    assert result.exit_code == 0
    assert "no submissions to export" in result.output
    assert not target.exists()


def test_clear_requires_confirmation(runner: CliRunner, tmp_path: Path) -> None:
    env = _env_with_home(tmp_path)
    runner.invoke(cli, ["submissions", "sync", "tourist"], env=env)

    aborted = runner.invoke(cli, ["submissions", "clear"], env=env, input="n\n")
    kept = runner.invoke(cli, ["submissions", "count"], env=env)
    cleared = runner.invoke(cli, ["submissions", "clear", "--yes"], env=env)
    emptied = runner.invoke(cli, ["submissions", "count"], env=env)

    assert aborted.exit_code == 1
    assert kept.output.strip() == "3"
    assert cleared.exit_code == 0
    assert emptied.output.strip() == "0"
