"""Tests for the text normalizer."""

from funmatch.config.models import DEFAULT_CLEANUP_PATTERNS
from funmatch.matching import TextNormalizer


def test_separators_become_spaces() -> None:
    assert TextNormalizer().normalize("one.two_three-four") == "one two three four"


def test_root_prefix_is_stripped() -> None:
    normalizer = TextNormalizer()

    assert normalizer.normalize("C:\\clip") == "clip"
    assert normalizer.normalize("/clip") == "clip"


def test_empty_input_yields_empty_output() -> None:
    assert TextNormalizer(DEFAULT_CLEANUP_PATTERNS).normalize("") == ""


def test_default_patterns_remove_technical_noise() -> None:
    normalizer = TextNormalizer(DEFAULT_CLEANUP_PATTERNS)

    assert normalizer.normalize("Alice_8K_180x180_VR.mp4") == "Alice"
    assert normalizer.normalize("Alice_Oculus_Quest2_H.265_60fps") == "Alice"
    assert normalizer.normalize("Alice www.example.com") == "Alice"
    assert normalizer.normalize("[Studio] Alice (Scene 2)") == "Studio Alice 2"


def test_patterns_apply_in_order() -> None:
    text = "foo bar baz"

    assert TextNormalizer([r"foo bar", r"foo"]).normalize(text) == "baz"
    assert TextNormalizer([r"foo", r"foo bar"]).normalize(text) == "bar baz"


def test_patterns_are_case_insensitive() -> None:
    assert TextNormalizer([r"remastered"]).normalize("Alice REMASTERED") == "Alice"


def test_invalid_pattern_is_ignored() -> None:
    normalizer = TextNormalizer(["(unclosed", "noise"])

    assert len(normalizer.rules) == 1
    assert normalizer.normalize("Alice noise") == "Alice"
