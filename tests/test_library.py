"""Tests for library scanning and the JSON cache."""

from pathlib import Path

import pytest

from funmatch.library import LibraryCache, LibraryEntry, LibraryScanner, clean_name
from funmatch.state import MissingLibraryError, StateError


def _touch(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("data", encoding="utf-8")


def test_clean_name_keeps_alphanumerics() -> None:
    assert clean_name("CzechVR - Alice_2024.03.10") == "CzechVRAlice20240310"


def test_entry_from_path(tmp_path: Path) -> None:
    path = tmp_path / "Studio" / "Alice - Bob.mp4"

    entry = LibraryEntry.from_path(path)

    assert entry.display_name == "Alice - Bob.mp4"
    assert entry.full_path == str(path)
    assert entry.normalized_name == "AliceBob"
    assert entry.parent_folder == "Studio"
    assert entry.companion_script_path() == path.with_suffix(".funscript")


def test_scanner_filters_extensions_hidden_and_excluded(tmp_path: Path) -> None:
    root = tmp_path / "videos"
    _touch(root / "b.mp4")
    _touch(root / "A.MKV")
    _touch(root / "notes.txt")
    _touch(root / ".hidden.mp4")
    _touch(root / ".cache" / "c.mp4")
    _touch(root / "trash" / "d.mp4")
    _touch(root / "keep" / "e.mp4")
    _touch(root / "private" / "f.mp4")

    scanner = LibraryScanner(
        extensions=[".mp4", "mkv"],
        exclude_paths=["Trash", str(root / "private")],
    )
    entries = scanner.scan([root])

    assert [entry.display_name for entry in entries] == ["A.MKV", "b.mp4", "e.mp4"]


def test_scanner_non_recursive_and_missing_roots(tmp_path: Path) -> None:
    root = tmp_path / "videos"
    _touch(root / "top.mp4")
    _touch(root / "sub" / "deep.mp4")

    scanner = LibraryScanner(extensions=[".mp4"], recursive=False)
    entries = scanner.scan([root, tmp_path / "missing", root])

    assert [entry.display_name for entry in entries] == ["top.mp4"]


def test_cache_round_trip(tmp_path: Path) -> None:
    cache = LibraryCache(tmp_path / "library")
    videos = [LibraryEntry.from_path(tmp_path / "v" / "Alice.mp4")]
    scripts = [LibraryEntry.from_path(tmp_path / "s" / "Alice.funscript")]

    cache.save_videos(videos)
    cache.save_scripts(scripts)

    assert cache.load_videos() == videos
    assert cache.load_scripts() == scripts


def test_cache_missing_and_invalid(tmp_path: Path) -> None:
    cache = LibraryCache(tmp_path / "library")

    with pytest.raises(MissingLibraryError):
        cache.load_videos()

    (tmp_path / "library").mkdir()
    (tmp_path / "library" / "scripts.json").write_text("{\"entries\": 3}", encoding="utf-8")
    with pytest.raises(StateError):
        cache.load_scripts()


def test_clean_name_keeps_accented_letters() -> None:
    assert clean_name("Zoë - Bob_2024") == "ZoëBob2024"
