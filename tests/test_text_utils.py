"""Tests for source code normalization and range notation."""

from __future__ import annotations

import pytest

from objstage.models import InvalidSourceCodeError
from objstage.text_utils import compress_ranges, expand_ranges, normalize_code, normalize_codes


@pytest.mark.parametrize(
    ("ids", "expected"),
    [
        ([], ""),
        ([5], "5"),
        ([1, 2], "1|2"),
        ([1, 2, 3], "1..3"),
        ([1, 2, 4, 5, 6, 9], "1|2|4..6|9"),
        ([50000, 50001, 50002, 50003], "50000..50003"),
    ],
)
def test_compress_ranges_examples(ids: list[int], expected: str) -> None:
    assert compress_ranges(ids) == expected


def test_compress_ranges_keeps_duplicates() -> None:
    """Duplicates break a run but are never dropped."""
    assert compress_ranges([1, 1, 2]) == "1|1|2"
    assert compress_ranges([1, 2, 2, 3]) == "1|2|2|3"


@pytest.mark.parametrize(
    "ids",
    [
        [0, 1, 2, 3, 10, 11, 20],
        [3, 5, 7],
        [1, 2, 3, 5, 6, 7, 8, 12, 13],
        [18, 18, 19, 20, 21],
    ],
)
def test_expand_ranges_reconstructs_input(ids: list[int]) -> None:
    assert expand_ranges(compress_ranges(ids)) == ids


def test_compress_ranges_custom_delimiter() -> None:
    assert compress_ranges([1, 3, 4, 5], delimiter=", ") == "1, 3..5"


def test_expand_ranges_rejects_malformed_tokens() -> None:
    with pytest.raises(ValueError):
        expand_ranges("1|abc")
    with pytest.raises(ValueError):
        expand_ranges("9..3")


def test_normalize_code_upper_cases_and_validates() -> None:
    assert normalize_code(" dly ") == "DLY"
    assert normalize_code("a1b") == "A1B"
    for bad in ("", "DE", "DEVX", "D-V", "DÉV"):
        with pytest.raises(InvalidSourceCodeError):
            normalize_code(bad)


def test_normalize_codes_drops_repeats_in_order() -> None:
    assert normalize_codes(["prd", "DEV", "Prd", "bse"]) == ["PRD", "DEV", "BSE"]
