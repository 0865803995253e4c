"""Configuration classes for the Flask application."""

from __future__ import annotations

import os
import secrets
import tempfile
from pathlib import Path


def _load_secret() -> str:
    """Return the Flask secret key for the current process."""

    secret = os.environ.get("PAGE_SPLITTER_SECRET")
    if secret:
        return secret
    # Generate an unpredictable per-process key for local development.
    return secrets.token_urlsafe(64)


def _tmpfs_root() -> Path:
    configured = os.environ.get("PAGE_SPLITTER_TMP_ROOT")
    if configured:
        return Path(configured)
    shm = Path("/dev/shm")
    base = shm if shm.is_dir() else Path(tempfile.gettempdir())
    return base / "page_splitter"


class BaseConfig:
    SECRET_KEY = _load_secret()
    MAX_CONTENT_LENGTH = 512 * 1024 * 1024  # 512 MiB; uploads are capped at 500
    SESSION_COOKIE_SECURE = False
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Strict"
    UPLOAD_TMPFS_ROOT = _tmpfs_root()
    LOG_LEVEL = os.environ.get("PAGE_SPLITTER_LOG_LEVEL", "INFO")
    RESPONSE_HEADERS = {
        "X-Content-Type-Options": "nosniff",
        "X-Frame-Options": "DENY",
        "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'",
        "Referrer-Policy": "no-referrer",
    }


class TestingConfig(BaseConfig):
    TESTING = True
    UPLOAD_TMPFS_ROOT = Path(tempfile.gettempdir()) / "page_splitter_tests"
    LOG_LEVEL = "WARNING"


__all__ = ["BaseConfig", "TestingConfig"]
