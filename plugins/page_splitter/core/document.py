"""Thin wrapper around PyPDF2 for loading documents and copying pages."""

from __future__ import annotations

import math
from dataclasses import dataclass
from io import BytesIO

from PyPDF2 import PdfReader, PdfWriter

from .errors import DocumentLoadError, PageExtractionError

MAX_FILE_SIZE_BYTES = 500 * 1024 * 1024

_SIZE_UNITS = ("B", "KB", "MB", "GB", "TB")


@dataclass(frozen=True)
class PdfMetadata:
    """Metadata extracted from a PDF document."""

    pages: int
    size_bytes: int

    @property
    def size_label(self) -> str:
        return format_file_size(self.size_bytes)


class PdfSource:
    """A loaded PDF that hands out single pages as standalone documents."""

    def __init__(self, reader: PdfReader, page_count: int):
        self._reader = reader
        self.page_count = page_count

    @classmethod
    def load(cls, data: bytes) -> "PdfSource":
        try:
            reader = PdfReader(BytesIO(data))
            page_count = len(reader.pages)
        except Exception as exc:
            raise DocumentLoadError(f"Unable to read PDF: {exc}") from exc
        return cls(reader, page_count)

    def extract_page(self, page_number: int) -> bytes:
        """Return page ``page_number`` (1-based) as a one-page PDF."""

        if page_number < 1 or page_number > self.page_count:
            raise PageExtractionError(
                page_number, f"Page {page_number} does not exist in this document"
            )
        try:
            writer = PdfWriter()
            writer.add_page(self._reader.pages[page_number - 1])
            buf = BytesIO()
            writer.write(buf)
        except Exception as exc:
            raise PageExtractionError(
                page_number, str(exc) or f"Unable to extract page {page_number}"
            ) from exc
        return buf.getvalue()


def pdf_metadata(data: bytes) -> PdfMetadata:
    source = PdfSource.load(data)
    return PdfMetadata(pages=source.page_count, size_bytes=len(data))


def format_file_size(size_bytes: float, fraction_digits: int = 2) -> str:
    """Human readable size using 1024-based units, e.g. ``"1.50 MB"``."""

    if not math.isfinite(size_bytes) or size_bytes < 0:
        return "0 B"

    value = float(size_bytes)
    unit_index = 0
    while value >= 1024 and unit_index < len(_SIZE_UNITS) - 1:
        value /= 1024
        unit_index += 1

    decimals = 0 if unit_index == 0 else fraction_digits
    return f"{value:.{decimals}f} {_SIZE_UNITS[unit_index]}"


__all__ = [
    "MAX_FILE_SIZE_BYTES",
    "PdfMetadata",
    "PdfSource",
    "pdf_metadata",
    "format_file_size",
]
