from __future__ import annotations

from .document import (
    MAX_FILE_SIZE_BYTES,
    PdfMetadata,
    PdfSource,
    format_file_size,
    pdf_metadata,
)
from .errors import (
    ArchiveBuildError,
    ConfigurationError,
    DocumentLoadError,
    EmptySequenceError,
    ErrorKind,
    InsufficientPagesError,
    PageExtractionError,
    RangeFormatError,
    RangeOrderError,
    SplitError,
)
from .naming import build_file_name, determine_padding_length, pad_number
from .ranges import (
    RANGE_LIST_PATTERN,
    RANGE_TOKEN_PATTERN,
    build_sequence,
    generate_inclusive_range,
    parse_exclusions,
    parse_page_segments,
    parse_range_spans,
)
from .settings import DEFAULT_ZIP_NAME, SplitterSettings, load_settings
from .split import (
    PageOutcome,
    ProcessingResult,
    SplitPlan,
    SplitRun,
    check_page_bounds,
    check_span_bounds,
    iter_split,
    open_archive,
    plan_split,
    run_split,
)
from .validate import SplitConfiguration, validate_configuration


__all__ = [
    "MAX_FILE_SIZE_BYTES",
    "PdfMetadata",
    "PdfSource",
    "format_file_size",
    "pdf_metadata",
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
    "build_file_name",
    "determine_padding_length",
    "pad_number",
    "RANGE_LIST_PATTERN",
    "RANGE_TOKEN_PATTERN",
    "build_sequence",
    "generate_inclusive_range",
    "parse_exclusions",
    "parse_page_segments",
    "parse_range_spans",
    "DEFAULT_ZIP_NAME",
    "SplitterSettings",
    "load_settings",
    "PageOutcome",
    "ProcessingResult",
    "SplitPlan",
    "SplitRun",
    "check_page_bounds",
    "check_span_bounds",
    "iter_split",
    "open_archive",
    "plan_split",
    "run_split",
    "SplitConfiguration",
    "validate_configuration",
]
