"""Pipeline step functions: load, validate, derive, and assemble"""

import logging
from pathlib import Path
from typing import Iterable

from mdblog.config import PipelineConfig
from mdblog.core.collection import assemble_collection
from mdblog.core.models import ContentRecord, PipelineResult, RawDoc
from mdblog.core.parse import discover_files, load_document, make_identifier
from mdblog.core.schema import validate_frontmatter
from mdblog.core.utils.slug import sanitize_slug
from mdblog.core.utils.tags import normalize_tags
from mdblog.core.utils.text import excerpt_for, reading_time
from mdblog.errors import CollectionError, SchemaError


logger = logging.getLogger(__name__)


def build_record(doc: RawDoc, config: PipelineConfig) -> ContentRecord | SchemaError:
    """Validate one document and derive its computed fields."""
    result = validate_frontmatter(doc.identifier, doc.frontmatter)
    if not result.ok:
        return result.error

    slug = sanitize_slug(doc.identifier)
    if not slug:
        return SchemaError(doc.identifier, "slug", "invalid-slug",
                           "identifier has no URL-safe characters")

    shell = result.shell
    return ContentRecord(
        identifier=doc.identifier,
        slug=slug,
        title=shell.title,
        description=shell.description,
        publish_date=shell.publish_date,
        author=shell.author,
        tags=normalize_tags(shell.tags, config.max_tags),
        image=shell.image,
        draft=shell.draft,
        body=doc.body,
        reading_time_minutes=reading_time(doc.body, config),
        excerpt=excerpt_for(doc.body, config),
    )


def load_documents(path: Path) -> tuple[list[RawDoc], list[SchemaError]]:
    """Load every .md/.mdx file under path; unreadable frontmatter becomes a SchemaError."""
    docs, rejected = [], []
    for p in discover_files(path):
        try:
            docs.append(load_document(p, path))
        except ValueError as e:
            rejected.append(SchemaError(make_identifier(p, path), "frontmatter", "bad-frontmatter", str(e)))
    return docs, rejected


def run_pipeline(docs: Iterable[RawDoc], config: PipelineConfig = PipelineConfig()) -> PipelineResult:
    """Validate and derive every document, then assemble the published collection.

    Per-record failures are collected on the result; CollectionError propagates
    only after every document has been validated and carries those failures too.
    """
    records: list[ContentRecord] = []
    rejected: list[SchemaError] = []
    for doc in docs:
        outcome = build_record(doc, config)
        if isinstance(outcome, SchemaError):
            logger.warning("Rejected %s (%s): %s (%s)", outcome.identifier, doc.path, outcome.kind, outcome.field)
            rejected.append(outcome)
        else:
            records.append(outcome)

    drafts = sum(1 for r in records if r.draft)
    try:
        ordered = assemble_collection(records)
    except CollectionError as e:
        e.rejected = rejected
        raise
    logger.info("Assembled %d post(s); %d draft(s) skipped, %d rejected",
                len(ordered), drafts, len(rejected))
    return PipelineResult(records=ordered, rejected=rejected, drafts=drafts)


def run_build(path: str | Path, config: PipelineConfig = PipelineConfig()) -> PipelineResult:
    """Load path (file or directory) and run the full pipeline over it."""
    docs, load_errors = load_documents(Path(path))
    for e in load_errors:
        logger.warning("Rejected %s: %s (%s)", e.identifier, e.kind, e.field)
    try:
        result = run_pipeline(docs, config)
    except CollectionError as e:
        e.rejected = load_errors + e.rejected
        raise
    result.rejected = load_errors + result.rejected
    return result
