"""Slug sanitization for post identifiers"""

import re


_UNSAFE_RE = re.compile(r'[^a-z0-9-]')
_HYPHENS_RE = re.compile(r'-+')


def sanitize_slug(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated URL-safe slug; '' for empty input."""
    text = _UNSAFE_RE.sub('-', text.lower())
    return _HYPHENS_RE.sub('-', text).strip('-')
