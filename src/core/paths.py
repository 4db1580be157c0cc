from __future__ import annotations

import fnmatch
from typing import Tuple

"""
Path utilities used across the project.

Provides POSIX-style normalization, splitting of a path pattern into its
static base and wildcard remainder, and a component-wise '**' supporting
glob matcher used by both FileAccess realizations.
"""

WILDCARD_CHARS = frozenset("*?[")


def normalize_posix_relpath(p: str) -> str:
    """Normalize a user path to a clean POSIX relative path.

    Converts backslashes to '/', trims whitespace, removes leading '/'
    and repeated './' markers, and a trailing '/'.
    """
    s = (p or "").strip()
    s = s.replace("\\", "/")        # Unify path separators across OSes.
    s = s.lstrip("/")               # Patterns are always relative to the root.
    while s.startswith("./"):
        s = s[2:]
    if s == ".":
        return ""
    return s.rstrip("/")


def split_posix(p: str) -> Tuple[str, ...]:
    """Split a POSIX path into non-empty segments, dropping '.' segments."""
    s = (p or "").strip().replace("\\", "/").strip("/")
    if not s:
        return tuple()
    return tuple(seg for seg in s.split("/") if seg and seg != ".")


def has_wildcard(segment: str) -> bool:
    return any(ch in WILDCARD_CHARS for ch in segment)


def split_pattern(pattern: str) -> Tuple[str, str]:
    """Split a pattern into (base directory, glob remainder).

    The base is every segment before the first one holding a wildcard.
    'logs/2024/*.txt' -> ('logs/2024', '*.txt'); 'a/b.txt' -> ('a/b.txt', '').
    """
    parts = split_posix(pattern)
    for i, seg in enumerate(parts):
        if has_wildcard(seg):
            return "/".join(parts[:i]), "/".join(parts[i:])
    return "/".join(parts), ""


def glob_match(rel_path: str, pattern: str) -> bool:
    """Match a relative path against a glob pattern with '**' support."""
    parts = split_posix(rel_path)

    pat = (pattern or "").strip().replace("\\", "/").strip("/")
    if not pat:
        pat = "**/*"  # Default: match everything.
    pats = split_posix(pat)

    def rec(i: int, j: int) -> bool:
        if j == len(pats):
            return i == len(parts)

        token = pats[j]
        if token == "**":
            return rec(i, j + 1) or (i < len(parts) and rec(i + 1, j))

        return (
            i < len(parts)
            and fnmatch.fnmatchcase(parts[i], token)
            and rec(i + 1, j + 1)
        )

    return rec(0, 0)
