"""Unit tests for configuration management."""

from pathlib import Path

import pytest

from cfhelper.config import (
    DEFAULT_TAGS,
    CFHelperConfig,
    ConfigError,
    ConfigManager,
    assign_nested,
    flatten_for_env,
    resolve_with_precedence,
)


def _fresh_manager(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> ConfigManager:
    monkeypatch.setenv("HOME", str(tmp_path))
    return ConfigManager()


def test_ensure_exists_creates_default_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    manager = _fresh_manager(tmp_path, monkeypatch)

    path = manager.ensure_exists()

    assert path == tmp_path / ".cfhelper" / "config.yaml"
    text = path.read_text(encoding="utf-8")
    assert "cfhelper configuration file" in text
    assert "Last updated:" in text

    config = manager.load(include_env=False)
    assert isinstance(config, CFHelperConfig)
    assert config.catalog.tags == DEFAULT_TAGS
    assert config.catalog.ttl_hours == pytest.approx(24.0)


def test_resolve_with_precedence_respects_order(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    manager = _fresh_manager(tmp_path, monkeypatch)
    manager.ensure_exists()

    manager.save({"user": {"handle": "tourist"}, "search": {"result_limit": 10}})

    env = {"CFHELPER__SEARCH__RESULT_LIMIT": "25", "CFHELPER__API__TIMEOUT_SECONDS": "5"}
    cli = {"search.result_limit": 30}

    config = manager.load(cli_overrides=cli, env_overrides=env)

    assert config.user.handle == "tourist"
    assert config.api.timeout_seconds == pytest.approx(5.0)
    # CLI overrides take precedence over environment
    assert config.search.result_limit == 30


def test_environment_ignored_when_disabled(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    manager = _fresh_manager(tmp_path, monkeypatch)
    monkeypatch.setenv("CFHELPER__USER__HANDLE", "petr")

    assert manager.load().user.handle == "petr"
    assert manager.load(include_env=False).user.handle is None


def test_invalid_yaml_raises_config_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    manager = _fresh_manager(tmp_path, monkeypatch)
    manager.ensure_exists()

    manager.config_path.write_text("- not-a-mapping", encoding="utf-8")

    with pytest.raises(ConfigError):
        manager.load()


def test_unknown_keys_are_rejected() -> None:
    with pytest.raises(ConfigError):
        resolve_with_precedence(defaults=CFHelperConfig(), file_overrides={"catalog": {"ttl": 1}})


def test_flatten_for_env_round_trips_defaults() -> None:
    flat = flatten_for_env(CFHelperConfig())

    assert flat["CFHELPER__API__BASE_URL"] == "https://codeforces.com/api"
    assert flat["CFHELPER__CATALOG__FOLDER_SIZE"] == "20"
    assert flat["CFHELPER__USER__HANDLE"] == "null"


def test_resolve_with_precedence_invalid_value_raises() -> None:
    with pytest.raises(ConfigError):
        resolve_with_precedence(
            defaults=CFHelperConfig(),
            file_overrides={"search": {"result_limit": "not-an-int"}},
        )


def test_assign_nested_rejects_scalar_parent() -> None:
    data = {"user": "tourist"}

    with pytest.raises(ConfigError):
        assign_nested(data, ["user", "handle"], "petr")

    fresh: dict = {}
    assign_nested(fresh, ["user", "handle"], "petr")
    assert fresh == {"user": {"handle": "petr"}}


def test_config_path_can_be_overridden_by_environment(tmp_path: Path) -> None:
    target = tmp_path / "elsewhere.yaml"

    manager = ConfigManager(env={"CFHELPER_CONFIG": str(target)})

    assert manager.config_path == target
    assert manager.ensure_exists() == target


def test_set_value_validates_before_writing(tmp_path: Path) -> None:
    manager = ConfigManager(config_path=tmp_path / "config.yaml", env={})

    change = manager.set_value("user.exclude_solved", "true")
    repeat = manager.set_value("user.exclude_solved", "true")

    assert change.changed
    assert change.key == "user.exclude_solved"
    assert not repeat.changed
    assert manager.load().user.exclude_solved is True

    before = manager.read_text()
    with pytest.raises(ConfigError):
        manager.set_value("catalog.folder_size", "[1, 2]")
    with pytest.raises(ConfigError):
        manager.set_value("catalog..tags", "[]")
    assert manager.read_text() == before


@pytest.mark.parametrize(
    "key",
    ["search.result_limit", "catalog.folder_size", "catalog.ttl_hours", "cli.recent_limit"],
)
def test_negative_limits_are_rejected(key: str) -> None:
    section, name = key.split(".")

    with pytest.raises(ConfigError):
        resolve_with_precedence(defaults=CFHelperConfig(), file_overrides={section: {name: -2}})
