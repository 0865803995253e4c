"""Run planning and the per-page extraction loop."""

from __future__ import annotations

import zipfile
from dataclasses import dataclass, field
from io import BytesIO
from typing import AbstractSet, Any, Iterator, List, Mapping, Sequence, Tuple

from common.logging import get_logger

from .document import PdfSource
from .errors import (
    ArchiveBuildError,
    EmptySequenceError,
    InsufficientPagesError,
    PageExtractionError,
)
from .naming import build_file_name, determine_padding_length
from .ranges import build_sequence, parse_exclusions, parse_range_spans
from .validate import SplitConfiguration, validate_configuration

logger = get_logger()

# Share of the progress bar reserved for loading and planning; pages fill the
# next 70% and archiving the remainder.
_PLANNED_PROGRESS = 20.0
_PAGES_PROGRESS = 70.0


@dataclass(frozen=True)
class ProcessingResult:
    """Outcome for one entry of the run manifest."""

    file_name: str
    success: bool
    error: str | None = None

    def to_dict(self) -> Mapping[str, Any]:
        return {"file_name": self.file_name, "success": self.success, "error": self.error}


@dataclass(frozen=True)
class SplitPlan:
    sequence: List[int]
    padding_length: int
    page_count: int
    entries: List[tuple[int, str]] = field(default_factory=list)


@dataclass(frozen=True)
class PageOutcome:
    """A single step of :func:`iter_split`."""

    position: int
    total: int
    sequence_number: int
    result: ProcessingResult

    @property
    def progress(self) -> float:
        return _PLANNED_PROGRESS + ((self.position + 1) / self.total) * _PAGES_PROGRESS


@dataclass(frozen=True)
class SplitRun:
    plan: SplitPlan
    results: List[ProcessingResult]
    archive: bytes

    @property
    def succeeded(self) -> int:
        return sum(1 for item in self.results if item.success)

    @property
    def failed(self) -> int:
        return len(self.results) - self.succeeded


def check_page_bounds(sequence: Sequence[int], page_count: int) -> None:
    if not sequence:
        return
    highest = max(sequence)
    if highest > page_count:
        raise InsufficientPagesError(highest, page_count)


def check_span_bounds(
    spans: Sequence[Tuple[int, int]], excluded: AbstractSet[int], page_count: int
) -> None:
    """Raise :class:`InsufficientPagesError` before any span is expanded.

    Only the part of each span above ``page_count`` is inspected. It holds a
    surviving page when it has more values than there are exclusions, and the
    highest survivor is found by stepping down past excluded values.
    """

    highest = None
    for start, end in spans:
        if end <= page_count:
            continue
        low = max(start, page_count + 1)
        blocked = sum(1 for page in excluded if low <= page <= end)
        if end - low + 1 <= blocked:
            continue
        top = end
        while top in excluded:
            top -= 1
        if highest is None or top > highest:
            highest = top
    if highest is not None:
        raise InsufficientPagesError(highest, page_count)


def plan_split(config: SplitConfiguration, page_count: int) -> SplitPlan:
    """Resolve ``config`` into an ordered list of ``(page, file name)`` pairs.

    Every whole-run precondition is checked here, before a single page is
    copied.
    """

    check_span_bounds(
        parse_range_spans(config.ranges), parse_exclusions(config.exclusions), page_count
    )
    sequence = build_sequence(config.ranges, config.exclusions)
    if not sequence:
        raise EmptySequenceError(
            "No valid pages to process after applying ranges and exclusions"
        )
    check_page_bounds(sequence, page_count)

    padding_length = determine_padding_length(sequence, config.ranges)
    entries = [
        (
            number,
            build_file_name(
                prefix=config.prefix,
                suffix=config.suffix,
                sequence_number=number,
                padding_length=padding_length,
            ),
        )
        for number in sequence
    ]
    return SplitPlan(
        sequence=sequence,
        padding_length=padding_length,
        page_count=page_count,
        entries=entries,
    )


def iter_split(
    source: PdfSource, plan: SplitPlan, archive: zipfile.ZipFile
) -> Iterator[PageOutcome]:
    """Extract each planned page in order, archiving successes as they happen.

    A page that cannot be copied is reported as a failed outcome and the
    remaining pages are still processed.
    """

    total = len(plan.entries)
    for position, (number, file_name) in enumerate(plan.entries):
        try:
            data = source.extract_page(number)
        except PageExtractionError as exc:
            logger.warning("page %s failed: %s", number, exc)
            result = ProcessingResult(file_name=file_name, success=False, error=exc.message)
            yield PageOutcome(position, total, number, result)
            continue

        archive.writestr(file_name, data)
        result = ProcessingResult(file_name=file_name, success=True)
        yield PageOutcome(position, total, number, result)


def open_archive(buffer: BytesIO, compress_level: int | None = None) -> zipfile.ZipFile:
    return zipfile.ZipFile(
        buffer, "w", compression=zipfile.ZIP_DEFLATED, compresslevel=compress_level
    )


def run_split(config: SplitConfiguration, *, compress_level: int | None = None) -> SplitRun:
    """Validate, plan and execute a full split, returning the archive bytes."""

    issue = validate_configuration(config)
    if issue is not None:
        raise issue

    source = PdfSource.load(config.document or b"")
    plan = plan_split(config, source.page_count)
    logger.info(
        "splitting %s of %s pages (padding %s)",
        len(plan.entries),
        plan.page_count,
        plan.padding_length,
    )

    results: List[ProcessingResult] = []
    buffer = BytesIO()
    try:
        with open_archive(buffer, compress_level) as archive:
            for outcome in iter_split(source, plan, archive):
                results.append(outcome.result)
    except (OSError, zipfile.LargeZipFile) as exc:
        raise ArchiveBuildError(f"Unable to build archive: {exc}") from exc

    run = SplitRun(plan=plan, results=results, archive=buffer.getvalue())
    logger.info("split finished: %s ok, %s failed", run.succeeded, run.failed)
    return run


__all__ = [
    "ProcessingResult",
    "SplitPlan",
    "PageOutcome",
    "SplitRun",
    "check_page_bounds",
    "check_span_bounds",
    "plan_split",
    "iter_split",
    "open_archive",
    "run_split",
]
