from __future__ import annotations

import re
from typing import Iterable, List, Sequence

from .models import InvalidSourceCodeError

SOURCE_CODE_PATTERN = re.compile(r"^[A-Z0-9]{3}$")
OBJECT_HEADER_PATTERN = re.compile(r"^\s*OBJECT\s+([A-Za-z]+)\s+(\d+)\b")
RANGE_TOKEN_PATTERN = re.compile(r"^(\d+)\.\.(\d+)$")
RANGE_DELIMITER = "|"


def normalize_code(raw: str) -> str:
    code = (raw or "").strip().upper()
    if not SOURCE_CODE_PATTERN.match(code):
        raise InvalidSourceCodeError(f"Source code must be 3 characters of A-Z or 0-9, got {raw!r}")
    return code


def normalize_codes(raw_codes: Iterable[str]) -> List[str]:
    """Normalize codes to upper case and drop repeats, keeping first-seen order."""

    codes: List[str] = []
    for raw in raw_codes:
        code = normalize_code(raw)
        if code not in codes:
            codes.append(code)
    return codes


def _flush_run(tokens: List[str], start: int, end: int) -> None:
    if end - start >= 2:
        tokens.append(f"{start}..{end}")
        return
    tokens.extend(str(value) for value in range(start, end + 1))


def compress_ranges(ids: Sequence[int], delimiter: str = RANGE_DELIMITER) -> str:
    """Render ascending integers with runs of three or more folded into ``start..end``.

    Duplicates are kept as separate tokens so that expanding the result gives
    back the input sequence.
    """

    if not ids:
        return ""

    tokens: List[str] = []
    start = end = ids[0]
    for value in ids[1:]:
        if value == end + 1:
            end = value
            continue
        _flush_run(tokens, start, end)
        start = end = value
    _flush_run(tokens, start, end)
    return delimiter.join(tokens)


def expand_ranges(text: str, delimiter: str = RANGE_DELIMITER) -> List[int]:
    values: List[int] = []
    if not text.strip():
        return values
    for token in text.split(delimiter):
        token = token.strip()
        match = RANGE_TOKEN_PATTERN.match(token)
        if match:
            start, end = int(match.group(1)), int(match.group(2))
            if end < start:
                raise ValueError(f"Descending range token: {token!r}")
            values.extend(range(start, end + 1))
            continue
        if not token.isdigit():
            raise ValueError(f"Malformed range token: {token!r}")
        values.append(int(token))
    return values
