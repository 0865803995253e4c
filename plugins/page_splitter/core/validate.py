"""Pre-flight checks for a split request."""

from __future__ import annotations

import re
from dataclasses import dataclass

from .errors import ConfigurationError, ErrorKind
from .ranges import RANGE_LIST_PATTERN

_WHITESPACE = re.compile(r"\s+")


@dataclass(frozen=True)
class SplitConfiguration:
    """Everything a single split run needs from the caller."""

    document: bytes | None
    ranges: str = ""
    exclusions: str = ""
    prefix: str = ""
    suffix: str = ""
    zip_name: str = ""


def validate_configuration(config: SplitConfiguration) -> ConfigurationError | None:
    """Return the first problem with ``config``, or ``None`` when it is usable.

    Only the overall shape of the range string is checked here; ordering
    problems such as ``"5-1"`` are reported later by the range parser.
    """

    if config.document is None:
        return ConfigurationError(ErrorKind.MISSING_FILE, "Please upload a PDF file")

    if not config.ranges.strip():
        return ConfigurationError(ErrorKind.MISSING_RANGES, "Please enter page ranges")

    compact = _WHITESPACE.sub("", config.ranges)
    if not RANGE_LIST_PATTERN.fullmatch(compact):
        return ConfigurationError(
            ErrorKind.INVALID_FORMAT,
            "Invalid range format. Use values like '1-5,8,10-12'",
        )

    return None


__all__ = ["SplitConfiguration", "validate_configuration"]
