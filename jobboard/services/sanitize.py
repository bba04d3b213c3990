# jobboard/services/sanitize.py
"""
Escaping and case folding for user-supplied search text.

Both backends match filters as case-insensitive substrings. The in-memory
backend compiles a regular expression, the structured store issues
``lower(column) LIKE ... ESCAPE '\\'``. Every term goes through this module
first so that ``C++`` or ``50%`` only ever match their literal characters.

Case folding is ``str.lower`` on both sides: in Python for the in-memory
backend, and through SQL ``lower()`` for the store (on SQLite that is the
Python function registered in ``jobboard.database``).
"""
import re

from sqlalchemy import func
from sqlalchemy.sql.elements import ColumnElement

# . * + ? ^ $ { } ( ) | [ ] \
_REGEX_META_RE = re.compile(r"[.*+?^${}()|\[\]\\]")

# SQL LIKE wildcards plus the escape char itself
_LIKE_META_RE = re.compile(r"[%_\\]")

LIKE_ESCAPE = "\\"


def fold(value: str) -> str:
    return value.lower()


def escape_regex(term: str) -> str:
    """Backslash-escape regex metacharacters."""
    return _REGEX_META_RE.sub(lambda m: "\\" + m.group(0), term or "")


def compile_matcher(term: str) -> re.Pattern:
    """Literal pattern for an already-folded haystack (see `contains`)."""
    return re.compile(escape_regex(fold(term or "")))


def escape_like(term: str) -> str:
    return _LIKE_META_RE.sub(lambda m: LIKE_ESCAPE + m.group(0), term or "")


def like_pattern(term: str) -> str:
    """'%term%' with LIKE wildcards escaped; pair with escape=LIKE_ESCAPE."""
    return f"%{escape_like(term)}%"


def contains(pattern: re.Pattern, value) -> bool:
    """Null-safe substring test (NULL never matches, like SQL)."""
    if value is None:
        return False
    return pattern.search(fold(str(value))) is not None


def folded_like(column, term: str) -> ColumnElement:
    """Store-side twin of `contains(compile_matcher(term), value)`."""
    return func.lower(column).like(like_pattern(fold(term)), escape=LIKE_ESCAPE)
