"""Tag normalization for post frontmatter"""

import re
from typing import Any, Iterable


TAG_RE = re.compile(r'[a-z0-9\-\s]+')


def normalize_tags(tags: Iterable[Any], max_tags: int = 10) -> tuple[str, ...]:
    """Return trimmed, lowercased tags that pass the allowed-character check.

    Order is preserved and duplicates are kept; only the first max_tags survive.
    """
    cleaned = (t.strip().lower() for t in tags if isinstance(t, str) and t.strip())
    return tuple(t for t in cleaned if TAG_RE.fullmatch(t))[:max_tags]
