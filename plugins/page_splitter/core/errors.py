"""Error taxonomy for the page splitter engine."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Closed set of failure kinds a split run can report."""

    MISSING_FILE = "missing_file"
    MISSING_RANGES = "missing_ranges"
    INVALID_FORMAT = "invalid_format"
    RANGE_FORMAT = "range_format"
    RANGE_ORDER = "range_order"
    EMPTY_SEQUENCE = "empty_sequence"
    INSUFFICIENT_PAGES = "insufficient_pages"
    DOCUMENT_LOAD = "document_load"
    PAGE_EXTRACTION = "page_extraction"
    ARCHIVE_BUILD = "archive_build"


class SplitError(Exception):
    """Base class for every error raised by the splitter engine."""

    kind: ErrorKind

    @property
    def message(self) -> str:
        return str(self)


class ConfigurationError(SplitError):
    """Pre-flight validation failure; returned by ``validate_configuration``."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind


class RangeFormatError(SplitError):
    """Raised when a range token is neither ``N`` nor ``N-M``."""

    kind = ErrorKind.RANGE_FORMAT


class RangeOrderError(SplitError):
    """Raised when a range's start is greater than its end."""

    kind = ErrorKind.RANGE_ORDER


class EmptySequenceError(SplitError):
    kind = ErrorKind.EMPTY_SEQUENCE


class InsufficientPagesError(SplitError):
    """Raised when the plan asks for pages beyond the document length."""

    kind = ErrorKind.INSUFFICIENT_PAGES

    def __init__(self, highest: int, page_count: int):
        super().__init__(
            f"Not enough pages. The highest page requested is {highest}, "
            f"but PDF has only {page_count} pages."
        )
        self.highest = highest
        self.page_count = page_count


class DocumentLoadError(SplitError):
    kind = ErrorKind.DOCUMENT_LOAD


class PageExtractionError(SplitError):
    """Raised for a single page; the run records it and moves on."""

    kind = ErrorKind.PAGE_EXTRACTION

    def __init__(self, page_number: int, message: str):
        super().__init__(message)
        self.page_number = page_number


class ArchiveBuildError(SplitError):
    kind = ErrorKind.ARCHIVE_BUILD


__all__ = [
    "ErrorKind",
    "SplitError",
    "ConfigurationError",
    "RangeFormatError",
    "RangeOrderError",
    "EmptySequenceError",
    "InsufficientPagesError",
    "DocumentLoadError",
    "PageExtractionError",
    "ArchiveBuildError",
]
