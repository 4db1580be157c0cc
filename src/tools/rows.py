"""Row serialization shared by the listing tools.

Turns a FileRecord into a JSON-friendly dict holding only the requested
columns. The content stream is opened only when the 'file' column is
requested, and is always read fully and closed here.
"""

from __future__ import annotations

import base64
from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from core.models import RESULT_COLUMNS, FileRecord

TRUNCATED_MARKER = "\n\n...[TRUNCATED]..."


def _timestamp(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _row(record: FileRecord, file_value: Any, columns: Sequence[str]) -> Dict[str, Any]:
    full = {
        "file": file_value,
        "filePath": record.name,
        "lastModified": _timestamp(record.last_modified),
        "created": _timestamp(record.created),
        "size": record.size,
    }
    return {c: full[c] for c in columns}


def text_row(
    record: FileRecord,
    *,
    columns: Sequence[str] = RESULT_COLUMNS,
    max_chars: int,
) -> Dict[str, Any]:
    text = None
    if "file" in columns:
        text = record.content.read_text()
        if len(text) > max_chars:
            # Truncate long files to avoid returning huge payloads
            text = text[:max_chars] + TRUNCATED_MARKER
    return _row(record, text, columns)


def binary_row(record: FileRecord, *, columns: Sequence[str] = RESULT_COLUMNS) -> Dict[str, Any]:
    data = None
    if "file" in columns:
        data = base64.b64encode(record.content.read_bytes()).decode("ascii")
    return _row(record, data, columns)
