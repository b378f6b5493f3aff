"""File discovery and frontmatter extraction"""

import logging
import re
from pathlib import Path
from typing import Any

import yaml

from mdblog.core.models import RawDoc


logger = logging.getLogger(__name__)

FRONTMATTER_RE = re.compile(r'\A---[ \t]*\n(.*?)^---[ \t]*(?:\n|\Z)', re.DOTALL | re.MULTILINE)
MD_EXTENSIONS = {'.md', '.mdx'}


def _strip_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Return (frontmatter_dict, body) with YAML header removed."""
    m = FRONTMATTER_RE.match(text)
    if m:
        try:
            fm = yaml.safe_load(m.group(1)) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML frontmatter: {e}") from e
        if not isinstance(fm, dict):
            raise ValueError(f"Invalid YAML frontmatter: expected a mapping, got {type(fm).__name__}")
        return fm, text[m.end():]
    return {}, text


def discover_files(path: Path) -> list[Path]:
    """Return sorted .md/.mdx files under path, or [path] if a single file."""
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.is_file() and p.suffix in MD_EXTENSIONS)


def make_identifier(path: Path, root: Path) -> str:
    """Source location relative to root, POSIX separators, extension dropped."""
    if root.is_file() or path == root:
        return path.stem
    return path.relative_to(root).with_suffix('').as_posix()


def load_document(path: Path, root: Path) -> RawDoc:
    """Read a single markdown file into a RawDoc.

    Raises ValueError when the frontmatter block is not a YAML mapping.
    """
    raw = path.read_text(encoding='utf-8')
    frontmatter, body = _strip_frontmatter(raw)
    logger.debug("Loaded %s (%d frontmatter keys)", path, len(frontmatter))
    return RawDoc(
        identifier=make_identifier(path, root),
        path=path,
        frontmatter=frontmatter,
        body=body,
    )
