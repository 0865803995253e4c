"""Output filename helpers."""

from __future__ import annotations

from typing import Sequence


def determine_padding_length(sequence: Sequence[int], ranges: str | None) -> int:
    """Return the zero-padding width for every filename in a run.

    The width honours leading zeros typed in the first range token
    (``"01-05"`` asks for two digits) but never drops below the digit count
    of the largest page in ``sequence``.
    """

    requested = 1
    first_token = (ranges or "").split(",")[0].strip()
    if first_token:
        if "-" in first_token:
            requested = len(first_token.split("-", 1)[0].strip())
        else:
            requested = len(first_token)

    max_digits = max((len(str(value)) for value in sequence), default=0)
    return max(requested, max_digits, 1)


def pad_number(value: int, length: int) -> str:
    return str(value).rjust(length, "0")


def build_file_name(
    *, prefix: str, suffix: str, sequence_number: int, padding_length: int
) -> str:
    """Return ``{prefix}{padded number}{suffix}.pdf`` with trimmed affixes."""

    padded = pad_number(sequence_number, padding_length)
    return f"{prefix.strip()}{padded}{suffix.strip()}.pdf"


__all__ = ["determine_padding_length", "pad_number", "build_file_name"]
