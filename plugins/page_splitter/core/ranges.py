"""Utilities for parsing page range and exclusion strings."""

from __future__ import annotations

import re
from typing import Iterable, List, Set, Tuple

from .errors import RangeFormatError, RangeOrderError

# A single token: ``7`` or ``3-9``.
RANGE_TOKEN_PATTERN = re.compile(r"\d+(?:-\d+)?", re.ASCII)

# A whole range string with all whitespace already removed: ``1-5,8,10-12``.
# Rejects empty tokens, dangling dashes (``01-``) and non-digit bounds.
RANGE_LIST_PATTERN = re.compile(r"\d+(?:-\d+)?(?:,\d+(?:-\d+)?)*", re.ASCII)

_LEADING_INT = re.compile(r"[+-]?\d+", re.ASCII)


def generate_inclusive_range(start: int, end: int) -> List[int]:
    """Return ``[start, ..., end]``; ``start`` must not exceed ``end``."""

    if start > end:
        raise RangeOrderError(f"Invalid range: {start}-{end}")
    return list(range(start, end + 1))


def _parse_span(token: str) -> Tuple[int, int]:
    if not RANGE_TOKEN_PATTERN.fullmatch(token):
        raise RangeFormatError(f"Invalid range segment: {token}")

    if "-" not in token:
        number = int(token)
        return number, number

    start_s, end_s = token.split("-", 1)
    start = int(start_s)
    end = int(end_s)
    if start > end:
        raise RangeOrderError(f"Invalid range: {token}")
    return start, end


def parse_range_spans(ranges: str | None) -> List[Tuple[int, int]]:
    """Return the ``(start, end)`` bounds of each token without expanding them.

    Raises the same errors, in the same token order, as
    :func:`parse_page_segments`.
    """

    if not ranges or not ranges.strip():
        return []

    spans: List[Tuple[int, int]] = []
    for token in ranges.split(","):
        token = token.strip()
        if token:
            spans.append(_parse_span(token))
    return spans


def _dedupe(values: Iterable[int]) -> List[int]:
    seen: Set[int] = set()
    result: List[int] = []
    for value in values:
        if value not in seen:
            seen.add(value)
            result.append(value)
    return result


def parse_page_segments(ranges: str | None) -> List[int]:
    """Expand ``ranges`` into page numbers, in order, without duplicates.

    Tokens are processed left to right and a page that was already produced
    by an earlier token is dropped rather than moved, so ``"3,1-3,5"`` gives
    ``[3, 1, 2, 5]``. Blank input yields an empty list.
    """

    expanded: List[int] = []
    for start, end in parse_range_spans(ranges):
        expanded.extend(range(start, end + 1))
    return _dedupe(expanded)


def parse_exclusions(exclusions: str | None) -> Set[int]:
    """Return the page numbers listed in ``exclusions``.

    Each token contributes its leading integer (``"4abc"`` counts as 4);
    tokens without one are ignored. This never raises.
    """

    if not exclusions or not exclusions.strip():
        return set()

    excluded: Set[int] = set()
    for token in exclusions.split(","):
        match = _LEADING_INT.match(token.strip())
        if match:
            excluded.add(int(match.group()))
    return excluded


def build_sequence(ranges: str | None, exclusions: str | None = "") -> List[int]:
    """Apply ``exclusions`` to the parsed ``ranges``, keeping range order."""

    sequence = parse_page_segments(ranges)
    excluded = parse_exclusions(exclusions)
    return [page for page in sequence if page not in excluded]


__all__ = [
    "RANGE_TOKEN_PATTERN",
    "RANGE_LIST_PATTERN",
    "generate_inclusive_range",
    "parse_range_spans",
    "parse_page_segments",
    "parse_exclusions",
    "build_sequence",
]
