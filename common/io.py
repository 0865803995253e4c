"""Common IO helpers for plugins."""

from __future__ import annotations

import os
import shutil
import tempfile
from io import BytesIO
from pathlib import Path

SAFE_FILENAME_CHARS = {"-", "_", "."}


class TempDir:
    """Temporary directory rooted in tmpfs that cleans up eagerly."""

    def __init__(self, path: Path):
        self.path = path

    def cleanup(self) -> None:
        shutil.rmtree(self.path, ignore_errors=True)

    def __enter__(self) -> "TempDir":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.cleanup()


def ensure_tmpfs_root(root: Path) -> Path:
    root = Path(root)
    root.mkdir(parents=True, exist_ok=True)
    return root


def new_tmpfs_dir(root: Path, prefix: str = "splitter-") -> TempDir:
    base = ensure_tmpfs_root(root)
    path = Path(tempfile.mkdtemp(prefix=prefix, dir=base))
    return TempDir(path)


def buffer_from_bytes(data: bytes) -> BytesIO:
    buffer = BytesIO()
    buffer.write(data)
    buffer.seek(0)
    return buffer


def secure_filename(filename: str, *, fallback: str = "upload") -> str:
    """Sanitize filenames without relying on Werkzeug internals."""

    if not filename:
        return fallback
    name, ext = os.path.splitext(filename)
    safe_name = "".join(
        ch if ch.isalnum() or ch in SAFE_FILENAME_CHARS else "_" for ch in name
    )
    safe_ext = "".join(ch for ch in ext if ch.isalnum() or ch in SAFE_FILENAME_CHARS)
    safe_name = safe_name.strip("._") or fallback
    safe_ext = safe_ext.strip("._")
    return f"{safe_name}{f'.{safe_ext}' if safe_ext else ''}"


def archive_filename(name: str, *, fallback: str) -> str:
    """Return a safe ``.zip`` download name for a user supplied base name."""

    base = name.strip() or fallback
    if base.lower().endswith(".zip"):
        base = base[:-4]
    safe = secure_filename(base, fallback=fallback)
    return f"{safe}.zip"


__all__ = [
    "TempDir",
    "ensure_tmpfs_root",
    "new_tmpfs_dir",
    "buffer_from_bytes",
    "secure_filename",
    "archive_filename",
]
