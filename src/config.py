"""Configuration and environment helpers for the project.

Provides small helpers to read typed environment variables and exposes
project-level configuration constants used across the codebase (e.g.
PROJECT_ROOT, FILE_BACKEND, FILE_ENCODING, FAIL_ON_MISSING, limits).
"""

from __future__ import annotations

import locale
import os
from pathlib import Path
from typing import Optional


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


def _env_path(name: str) -> Optional[Path]:
    raw = (os.environ.get(name) or "").strip()
    return Path(raw) if raw else None


# Root directory for the local backend security boundary
PROJECT_ROOT = Path(os.environ.get("PROJECT_ROOT", ".")).resolve()

# Backend: "local" (disk under PROJECT_ROOT) or "virtual" (in-memory, archive-backed)
FILE_BACKEND = os.environ.get("FILE_BACKEND", "local").strip().lower()
FILE_ARCHIVE = _env_path("FILE_ARCHIVE")
FILE_ARCHIVE_URL = os.environ.get("FILE_ARCHIVE_URL", "").strip()

# Adapter options
FILE_ENCODING = (os.environ.get("FILE_ENCODING") or "").strip() or locale.getpreferredencoding(False)
FAIL_ON_MISSING = _env_bool("FAIL_ON_MISSING", True)

# Network / HTTP (archive download)
HTTP_VERIFY = _env_bool("HTTP_VERIFY", False)
HTTP_TIMEOUT = _env_float("HTTP_TIMEOUT", 20.0)

# Limits / output
MAX_FILE_CHARS = _env_int("MAX_FILE_CHARS", 200_000)
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").strip().upper()
