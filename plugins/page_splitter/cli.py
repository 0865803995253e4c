"""Command line interface for the page splitter plugin."""

from __future__ import annotations

import argparse
import json
import sys
from io import BytesIO
from pathlib import Path
from typing import Any

from common.io import archive_filename

from .core import (
    DEFAULT_ZIP_NAME,
    PdfSource,
    SplitConfiguration,
    SplitError,
    iter_split,
    open_archive,
    plan_split,
    validate_configuration,
)


def _print(payload: dict[str, Any]) -> None:
    print(json.dumps(payload, indent=2, sort_keys=True))


def _progress(message: str, *, quiet: bool) -> None:
    if not quiet:
        print(message, file=sys.stderr)


def command_split(args: argparse.Namespace) -> dict[str, Any]:
    input_path = Path(args.input)
    document = input_path.read_bytes() if input_path.is_file() else None
    config = SplitConfiguration(
        document=document,
        ranges=args.ranges,
        exclusions=args.exclusions,
        prefix=args.prefix,
        suffix=args.suffix,
        zip_name=args.zip_name,
    )
    issue = validate_configuration(config)
    if issue is not None:
        raise issue

    source = PdfSource.load(config.document or b"")
    _progress("[ 10%] loaded document", quiet=args.quiet)
    plan = plan_split(config, source.page_count)
    _progress(
        f"[ 20%] {len(plan.entries)} pages planned, padding {plan.padding_length}",
        quiet=args.quiet,
    )

    buffer = BytesIO()
    results = []
    with open_archive(buffer, args.compress_level) as archive:
        for outcome in iter_split(source, plan, archive):
            results.append(outcome.result)
            status = "ok" if outcome.result.success else f"failed: {outcome.result.error}"
            _progress(
                f"[{outcome.progress:3.0f}%] {outcome.result.file_name} {status}",
                quiet=args.quiet,
            )

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    archive_path = output_dir / archive_filename(args.zip_name, fallback=DEFAULT_ZIP_NAME)
    archive_path.write_bytes(buffer.getvalue())
    _progress("[100%] archive written", quiet=args.quiet)

    return {
        "archive": str(archive_path),
        "page_count": plan.page_count,
        "padding_length": plan.padding_length,
        "processed": sum(1 for item in results if item.success),
        "files": [item.to_dict() for item in results],
    }


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Split selected PDF pages into individually named files inside a ZIP"
    )
    parser.add_argument("input", help="Path to the source PDF")
    parser.add_argument("--ranges", required=True, help="Page ranges, e.g. '1-5,8,10-12'")
    parser.add_argument("--exclusions", default="", help="Pages to skip, e.g. '2,4'")
    parser.add_argument("--prefix", default="", help="Text placed before the page number")
    parser.add_argument("--suffix", default="", help="Text placed after the page number")
    parser.add_argument("--zip-name", dest="zip_name", default="", help="Archive base name")
    parser.add_argument("--output-dir", dest="output_dir", default=".", help="Archive directory")
    parser.add_argument(
        "--compress-level",
        dest="compress_level",
        type=int,
        choices=range(10),
        default=None,
        help="DEFLATE level 0-9",
    )
    parser.add_argument("--quiet", action="store_true", help="Suppress progress output")
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        summary = command_split(args)
    except SplitError as exc:
        raise SystemExit(f"error: {exc.message}") from exc
    _print(summary)


if __name__ == "__main__":
    main()
