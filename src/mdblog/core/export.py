"""Export pipeline: standardized MD/MDX, sidecar JSON, and collection indexes"""

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from mdblog.core.collection import tag_index
from mdblog.core.models import ContentRecord
from mdblog.core.utils.text import format_date, is_valid_url


logger = logging.getLogger(__name__)

INDEX_FILE = "_index.json"
TAGS_FILE = "_tags.json"


def build_frontmatter(record: ContentRecord) -> dict[str, Any]:
    """Normalized frontmatter for a published post (camelCase keys, ISO date)."""
    fm = {
        "title": record.title,
        "description": record.description,
        "publishDate": record.publish_date.isoformat(),
        "author": record.author,
        "tags": list(record.tags),
        "slug": record.slug,
        "readingTime": record.reading_time_minutes,
        "excerpt": record.excerpt,
    }
    if record.image:
        fm["image"] = record.image
    return fm


def build_mdx(record: ContentRecord) -> str:
    """Return the body with a normalized YAML frontmatter block prepended."""
    header = yaml.dump(build_frontmatter(record), default_flow_style=False, allow_unicode=True, sort_keys=False)
    return f"---\n{header}---\n\n{record.body.lstrip()}"


def build_summary(record: ContentRecord) -> dict[str, Any]:
    """Index entry for listing pages: everything but the body."""
    return {
        "identifier": record.identifier,
        "slug": record.slug,
        "title": record.title,
        "description": record.description,
        "publishDate": record.publish_date.isoformat(),
        "author": record.author,
        "tags": list(record.tags),
        "image": record.image,
        "draft": record.draft,
        "readingTimeMinutes": record.reading_time_minutes,
        "excerpt": record.excerpt,
    }


def build_sidecar(record: ContentRecord) -> dict[str, Any]:
    """All raw and derived fields of a record plus display helpers."""
    data = build_summary(record)
    data["body"] = record.body
    data["displayDate"] = format_date(record.publish_date)
    data["imageExternal"] = bool(record.image) and is_valid_url(record.image)
    return data


def write_doc(record: ContentRecord, output_dir: Path, fmt: str = 'mdx') -> tuple[Path, Path]:
    """Write MDX/MD + sidecar JSON for a single record.

    Output path: output_dir / slug.{fmt|json}. Returns (mdx_path, json_path).
    """
    output_dir.mkdir(parents=True, exist_ok=True)
    mdx_path = output_dir / f"{record.slug}.{fmt}"
    json_path = output_dir / f"{record.slug}.json"

    mdx_path.write_text(build_mdx(record), encoding='utf-8')
    json_path.write_text(json.dumps(build_sidecar(record), indent=2, ensure_ascii=False), encoding='utf-8')
    return mdx_path, json_path


def write_collection(records: list[ContentRecord], output_dir: Path, fmt: str = 'mdx') -> list[tuple[str, Path]]:
    """Write every record plus _index.json and _tags.json. Returns (slug, mdx_path) pairs.

    Slugs never contain '_', so the collection files cannot overwrite a sidecar.
    """
    results = []
    for record in records:
        mdx_path, _ = write_doc(record, output_dir, fmt)
        results.append((record.slug, mdx_path))

    output_dir.mkdir(parents=True, exist_ok=True)
    (output_dir / INDEX_FILE).write_text(
        json.dumps([build_summary(r) for r in records], indent=2, ensure_ascii=False), encoding='utf-8'
    )
    (output_dir / TAGS_FILE).write_text(
        json.dumps(tag_index(records), indent=2, ensure_ascii=False), encoding='utf-8'
    )
    logger.info("Exported %d post(s) to %s", len(results), output_dir)
    return results
