"""Tests for the studio registry and its persistence."""

import json
from pathlib import Path

import pytest

from funmatch.studios import DEFAULT_STUDIOS, StudioRegistry, StudioRegistryError, StudioStore


def test_detect_captures_adjacent_numbers() -> None:
    registry = StudioRegistry.from_mapping(DEFAULT_STUDIOS)

    after = registry.detect("CzechVR_741_Alice")
    before = registry.detect("741 CzechVR Alice")

    assert after is not None and after.name == "CzechVR" and after.number == "741"
    assert before is not None and before.number == "741"


def test_detect_ignores_numbers_belonging_to_dates() -> None:
    registry = StudioRegistry.from_mapping(DEFAULT_STUDIOS)

    match = registry.detect("CzechVR_2024-03-10_Alice")

    assert match is not None
    assert match.number is None


def test_detect_returns_none_without_match() -> None:
    assert StudioRegistry.from_mapping(DEFAULT_STUDIOS).detect("Alice Bob") is None


def test_invalid_patterns_are_skipped(caplog: pytest.LogCaptureFixture) -> None:
    registry = StudioRegistry([("Broken", ["(unclosed"]), ("Good", ["good"])])

    match = registry.detect("a good clip")

    assert match is not None and match.name == "Good"
    assert "invalid studio pattern" in caplog.text


def test_infer_prefers_registered_patterns() -> None:
    registry = StudioRegistry.from_mapping(DEFAULT_STUDIOS)

    assert registry.infer("czech vr - Alice.funscript") == "CzechVR"
    assert registry.infer("Alice_wankzvr_Bob.funscript") == "WankzVR"


def test_infer_falls_back_to_leading_label() -> None:
    registry = StudioRegistry()

    assert registry.infer("NewStudio - Bob.funscript") == "NewStudio"
    assert registry.infer("2024 - Bob.funscript") is None
    assert registry.infer("Bob") is None


def test_learn_appends_and_rejects_duplicates() -> None:
    registry = StudioRegistry([("Alpha", ["alpha"])])

    assert registry.learn("Alpha", "alp") is True
    assert registry.learn("Alpha", "alp") is False
    assert registry.learn("Beta", "beta") is True

    assert registry.names() == ["Alpha", "Beta"]
    assert registry.patterns_for("Alpha") == ["alpha", "alp"]


def test_store_seeds_defaults_when_missing(tmp_path: Path) -> None:
    registry = StudioStore(tmp_path / "studios.json").load()

    assert registry.names() == list(DEFAULT_STUDIOS)


def test_store_round_trips_in_order(tmp_path: Path) -> None:
    store = StudioStore(tmp_path / "studios.json")
    registry = StudioRegistry([("Zeta", ["zeta"]), ("Alpha", ["alpha", "alp"])])

    store.save(registry)

    assert json.loads(store.path.read_text(encoding="utf-8")) == {
        "Zeta": ["zeta"],
        "Alpha": ["alpha", "alp"],
    }
    assert store.load().as_mapping() == registry.as_mapping()


def test_store_with_malformed_file_yields_empty_registry(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    path = tmp_path / "studios.json"
    path.write_text("{not json", encoding="utf-8")

    registry = StudioStore(path).load()

    assert len(registry) == 0
    assert "unreadable" in caplog.text

    path.write_text(json.dumps({"Alpha": "alpha"}), encoding="utf-8")
    assert len(StudioStore(path).load()) == 0


def test_store_save_failure_raises(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    store = StudioStore(blocker / "studios.json")

    with pytest.raises(StudioRegistryError):
        store.save(StudioRegistry([("Alpha", ["alpha"])]))


def test_infer_with_inline_flag_pattern() -> None:
    registry = StudioRegistry([("Foo", ["(?i)foo"])])

    assert registry.infer("FOO - Alice.funscript") == "Foo"
    assert registry.infer("Alice_foo_Bob.funscript") == "Foo"
    assert registry.infer("Alice - Bob.funscript") == "Alice"


def test_infer_requires_delimiters_around_tokens() -> None:
    registry = StudioRegistry([("Foo", ["foo"])])

    assert registry.infer("Alice_foobar_Bob.funscript") == "Alice"
