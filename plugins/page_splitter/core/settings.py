"""Configuration helpers for the page splitter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

DEFAULT_ZIP_NAME = "split_files"


@dataclass(frozen=True)
class SplitterSettings:
    default_zip_name: str
    compress_level: int | None
    upload: Mapping[str, object]


def load_settings(raw: Mapping[str, object] | None) -> SplitterSettings:
    """Read the ``plugins.page_splitter`` block of ``config.yml``.

    Unknown or malformed values fall back to defaults: the archive name to
    ``split_files`` and the compression level to zlib's default.
    """

    raw = raw or {}
    upload = raw.get("upload")
    if not isinstance(upload, Mapping):
        upload = {}

    default_zip_name = str(raw.get("default_zip_name") or "").strip() or DEFAULT_ZIP_NAME

    compress_level: int | None = None
    raw_level = raw.get("compress_level")
    if raw_level is not None:
        try:
            level = int(float(raw_level))  # type: ignore[arg-type]
        except (TypeError, ValueError, OverflowError):
            level = -1
        compress_level = level if 0 <= level <= 9 else None

    return SplitterSettings(
        default_zip_name=default_zip_name,
        compress_level=compress_level,
        upload=dict(upload),
    )


__all__ = ["DEFAULT_ZIP_NAME", "SplitterSettings", "load_settings"]
