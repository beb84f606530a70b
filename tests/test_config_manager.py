"""Unit tests for configuration management."""

from pathlib import Path

import pytest

from funmatch.config import (
    ConfigError,
    ConfigManager,
    FunmatchConfig,
    assign_dotted,
    resolve_with_precedence,
)


def _fresh_manager(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, **kwargs) -> ConfigManager:
    monkeypatch.setenv("HOME", str(tmp_path))
    return ConfigManager(**kwargs)


def test_ensure_exists_creates_default_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    manager = _fresh_manager(tmp_path, monkeypatch)

    path = manager.ensure_exists()

    assert path == tmp_path / ".funmatch" / "config.yaml"
    text = path.read_text(encoding="utf-8")
    assert "funmatch configuration file" in text
    assert "Last updated:" in text

    config = manager.load(include_env=False)
    assert isinstance(config, FunmatchConfig)
    assert config.matching.min_score == 2


def test_state_files_live_beside_the_config(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    manager = _fresh_manager(tmp_path, monkeypatch)
    home = tmp_path / ".funmatch"

    assert manager.studios_path == home / "studios.json"
    assert manager.history_path == home / "history.log"
    assert manager.library_dir == home / "library"
    assert manager.log_path == home / "funmatch.log"


def test_resolve_with_precedence_respects_order(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    env = {
        "FUNMATCH__SESSION__DISPLAY_LIMIT": "20",
        "FUNMATCH__MATCHING__MIN_SCORE": "4",
    }
    manager = _fresh_manager(tmp_path, monkeypatch, env=env)
    manager.save({"session": {"default_action": "skip", "display_limit": 5}})

    config = manager.load(cli_overrides={"matching.min_score": 3})

    assert config.session.default_action == "skip"
    assert config.session.display_limit == 20
    # CLI overrides take precedence over environment
    assert config.matching.min_score == 3


def test_list_overrides_replace_defaults(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    manager = _fresh_manager(tmp_path, monkeypatch, env={})
    manager.save({"matching": {"cleanup_patterns": ["noise"]}})

    config = manager.load()

    assert config.matching.cleanup_patterns == ["noise"]


def test_invalid_yaml_raises_config_error(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    manager = _fresh_manager(tmp_path, monkeypatch)
    manager.ensure_exists()

    manager.config_path.write_text("- not-a-mapping", encoding="utf-8")

    with pytest.raises(ConfigError):
        manager.load()


def test_resolve_with_precedence_invalid_value_raises() -> None:
    with pytest.raises(ConfigError):
        resolve_with_precedence(
            defaults=FunmatchConfig(),
            file_overrides={"session": {"default_action": "maybe"}},
        )

    with pytest.raises(ConfigError):
        resolve_with_precedence(
            defaults=FunmatchConfig(),
            file_overrides={"session": {"unknown_key": True}},
        )


def test_assign_dotted_builds_nested_mappings() -> None:
    target: dict = {"session": {"display_limit": 5}}

    assign_dotted(target, ["session", "check_limit"], 7)
    assign_dotted(target, ["library", "recursive"], False)

    assert target == {
        "session": {"display_limit": 5, "check_limit": 7},
        "library": {"recursive": False},
    }
