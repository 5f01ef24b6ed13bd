"""Derive git branch names from task titles."""

from __future__ import annotations

import re
import string

from .constants import BRANCH_PREFIX, SLUG_FALLBACK, SLUG_MAX_LENGTH

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)
# JavaScript `\s`: unlike Python it includes U+FEFF and excludes U+001C..U+001F.
_WHITESPACE = "\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff"
_WHITESPACE_RE = re.compile(f"[{_WHITESPACE}]+")
_DISALLOWED_RE = re.compile(r"[^a-z0-9-]")
_HYPHEN_RUN_RE = re.compile(r"-+")


def sanitize_for_branch_name(text: str) -> str:
    """Turn arbitrary text into a short slug that is safe in a branch name.

    The result only contains ``[a-z0-9-]``, is at most 50 characters long,
    never starts or ends with a hyphen, and is never empty: text without any
    ASCII letter or digit becomes ``"untitled"``.  Applying the function to
    its own output returns the output unchanged.

    Case folding is ASCII-only, so non-Latin scripts are dropped entirely::

        >>> sanitize_for_branch_name("Fix  Login -- Bug!")
        'fix-login-bug'
        >>> sanitize_for_branch_name("ユーザー認証")
        'untitled'
    """
    if not text or _WHITESPACE_RE.fullmatch(text):
        return SLUG_FALLBACK

    slug = text.translate(_ASCII_LOWER)
    slug = _WHITESPACE_RE.sub("-", slug)
    slug = _DISALLOWED_RE.sub("", slug)
    slug = _HYPHEN_RUN_RE.sub("-", slug)
    slug = slug.strip("-")
    # Truncation can expose a trailing hyphen.
    slug = slug[:SLUG_MAX_LENGTH].strip("-")
    return slug or SLUG_FALLBACK


def generate_branch_name(task_id: int, title: str) -> str:
    """Return ``feature/task-<id>-<slug>`` for a task."""
    return f"{BRANCH_PREFIX}{task_id}-{sanitize_for_branch_name(title)}"
