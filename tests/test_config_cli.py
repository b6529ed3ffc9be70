"""CLI tests for configuration commands."""

import os
from pathlib import Path
from typing import Any

from click.testing import CliRunner

from cfhelper.cli import cli
from cfhelper.config import ConfigManager


def _env_with_home(tmp_path: Path) -> dict[str, Any]:
    env = {key: value for key, value in os.environ.items() if not key.startswith("CFHELPER__")}
    env["HOME"] = str(tmp_path)
    return env


def _config_path(tmp_path: Path) -> Path:
    return tmp_path / ".cfhelper" / "config.yaml"


def test_config_view_creates_and_displays_config(tmp_path: Path) -> None:
    runner = CliRunner()
    env = _env_with_home(tmp_path)

    result = runner.invoke(cli, ["config", "view"], env=env)

    assert result.exit_code == 0
    assert "catalog:" in result.output
    assert _config_path(tmp_path).exists()


def test_config_view_as_env_lists_variables(tmp_path: Path) -> None:
    runner = CliRunner()
    env = _env_with_home(tmp_path)
    env["CFHELPER__USER__HANDLE"] = "tourist"

    result = runner.invoke(cli, ["config", "view", "--as-env"], env=env)

    assert result.exit_code == 0
    assert "CFHELPER__USER__HANDLE=tourist" in result.output

    ignored = runner.invoke(cli, ["config", "view", "--as-env", "--no-env"], env=env)
    assert "CFHELPER__USER__HANDLE=null" in ignored.output


def test_config_set_updates_value_and_writes_diff(tmp_path: Path) -> None:
    runner = CliRunner()
    env = _env_with_home(tmp_path)

    result = runner.invoke(cli, ["config", "set", "user.handle", "--value", "tourist"], env=env)

    assert result.exit_code == 0
    assert "tourist" in result.output

    manager = ConfigManager(config_path=_config_path(tmp_path))
    config = manager.load(include_env=False)
    assert config.user.handle == "tourist"


def test_config_set_same_value_reports_no_change(tmp_path: Path) -> None:
    runner = CliRunner()
    env = _env_with_home(tmp_path)

    runner.invoke(cli, ["config", "set", "catalog.folder_size", "--value", "10"], env=env)
    result = runner.invoke(cli, ["config", "set", "catalog.folder_size", "--value", "10"], env=env)

    assert result.exit_code == 0
    assert "No changes applied" in result.output


def test_config_set_rejects_invalid_value(tmp_path: Path) -> None:
    runner = CliRunner()
    env = _env_with_home(tmp_path)

    result = runner.invoke(
        cli, ["config", "set", "search.result_limit", "--value", "lots"], env=env
    )

    assert result.exit_code != 0
    assert "Invalid configuration values" in result.output

    config = ConfigManager(config_path=_config_path(tmp_path)).load(include_env=False)
    assert config.search.result_limit == 50
