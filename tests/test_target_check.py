"""Tests for target resolution and read-only check queries."""

from pathlib import Path

from funmatch.config.models import MatchingSettings
from funmatch.library import LibraryEntry
from funmatch.matching import MetadataExtractor, ScoringEngine, check_query, resolve_target
from funmatch.studios import DEFAULT_STUDIOS, StudioRegistry


def _entry(path: str) -> LibraryEntry:
    return LibraryEntry.from_path(Path(path))


def test_resolve_target_picks_most_hits() -> None:
    videos = [
        _entry("/v/Alice_solo.mp4"),
        _entry("/v/Alice_and_Bob_beach.mp4"),
        _entry("/v/Bob_beach.mp4"),
    ]

    target = resolve_target("alice bob beach", videos)

    assert target is not None
    assert target.entry.display_name == "Alice_and_Bob_beach.mp4"
    assert target.hits == 3


def test_resolve_target_ties_go_to_first_video() -> None:
    videos = [_entry("/v/Alice_one.mp4"), _entry("/v/Alice_two.mp4")]

    target = resolve_target("alice", videos)

    assert target is not None
    assert target.entry.display_name == "Alice_one.mp4"


def test_resolve_target_without_hits_returns_none() -> None:
    videos = [_entry("/v/Alice.mp4")]

    assert resolve_target("zed", videos) is None
    assert resolve_target("   ", videos) is None
    assert resolve_target("alice", []) is None


def test_check_query_is_idempotent_and_leaves_registry_alone() -> None:
    settings = MatchingSettings()
    registry = StudioRegistry.from_mapping(DEFAULT_STUDIOS)
    extractor = MetadataExtractor(settings, registry)
    engine = ScoringEngine(settings, registry)
    scripts = [
        _entry("/s/CzechVR - Alice - 2024.03.10.funscript"),
        _entry("/s/Alice - other.funscript"),
        _entry("/s/Unrelated.funscript"),
    ]
    before = registry.as_mapping()

    first = check_query("CzechVR Alice 2024-03-10", scripts, extractor=extractor, engine=engine)
    second = check_query("CzechVR Alice 2024-03-10", scripts, extractor=extractor, engine=engine)

    assert first == second
    extraction, candidates = first
    assert extraction.studio == "CzechVR"
    assert [candidate.display_name for candidate in candidates] == [
        "CzechVR - Alice - 2024.03.10.funscript",
        "Alice - other.funscript",
    ]
    assert candidates[0].score == 17
    assert all(candidate.inferred_studio is None for candidate in candidates)
    assert registry.as_mapping() == before


def test_check_query_respects_limit() -> None:
    settings = MatchingSettings()
    registry = StudioRegistry()
    scripts = [_entry(f"/s/Alice {index}.funscript") for index in range(5)]

    _, candidates = check_query(
        "Alice",
        scripts,
        extractor=MetadataExtractor(settings, registry),
        engine=ScoringEngine(settings, registry),
        limit=2,
    )

    assert len(candidates) == 2
