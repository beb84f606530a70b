"""Tests for date detection."""

from funmatch.matching import find_date


def test_four_digit_year_with_separators() -> None:
    match = find_date("Alice_2024-03-10_8K")

    assert match is not None
    assert match.parts.compact == "240310"
    assert (match.parts.year, match.parts.month, match.parts.day) == (2024, 3, 10)
    assert match.shape == "yyyy-mm-dd"


def test_four_digit_year_wins_over_two_digit_year() -> None:
    match = find_date("clip 24.01.02 then 2023-05-06")

    assert match is not None
    assert match.parts.compact == "230506"


def test_two_digit_year_is_promoted() -> None:
    match = find_date("scene 23.11.05 alice")

    assert match is not None
    assert match.parts.year == 2023
    assert match.parts.compact == "231105"


def test_contiguous_digits() -> None:
    match = find_date("clip_20240310_alice")

    assert match is not None
    assert match.shape == "yyyymmdd"
    assert match.parts.compact == "240310"


def test_out_of_range_dates_are_ignored() -> None:
    assert find_date("code 2024-13-40") is None
    assert find_date("no date here") is None


def test_strip_from_removes_the_date() -> None:
    text = "Alice 2024.03.10 Bob"
    match = find_date(text)

    assert match is not None
    assert match.strip_from(text).split() == ["Alice", "Bob"]
