"""CLI command implementations"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer

from mdblog.config import Settings, load_config
from mdblog.core.collection import get_by_slug
from mdblog.core.export import write_collection
from mdblog.core.models import PipelineResult
from mdblog.core.pipeline import run_build
from mdblog.core.utils.text import format_date
from mdblog.errors import CollectionError, SchemaError


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling; also applies the configured log level."""
    try:
        settings = load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))
    root = logging.getLogger()
    if root.level != logging.DEBUG:  # --verbose wins over log_level
        root.setLevel(settings.log_level)
    return settings


def _source(path: Optional[str], settings: Settings) -> Path:
    src = Path(path or settings.content_dir)
    if not src.exists():
        _fail(f"Content path not found: {src}")
    return src


def _run(src: Path, settings: Settings) -> PipelineResult:
    """Run the pipeline; a duplicate slug aborts with every conflicting identifier listed."""
    try:
        return run_build(src, settings.pipeline)
    except CollectionError as e:
        _echo_rejected(e.rejected)
        typer.echo("Error: duplicate slugs, nothing written", err=True)
        for slug, ids in e.conflicts.items():
            typer.echo(f"  {slug}: {', '.join(ids)}", err=True)
        raise typer.Exit(1)


def _echo_rejected(rejected: list[SchemaError]) -> None:
    """Print per-record schema failures and a count."""
    if not rejected:
        return
    typer.echo(f"Rejected {len(rejected)} post(s):", err=True)
    for e in rejected:
        typer.echo(f"  {e.identifier}: {e.kind} ({e.field})", err=True)


def build_cmd(
    path: Annotated[Optional[str], typer.Argument(help="File or directory of posts")] = None,
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    fmt: Annotated[Optional[str], typer.Option("--output-format", help="md or mdx")] = None,
    excerpt_length: Annotated[Optional[int], typer.Option("--excerpt-length", help="Max excerpt length")] = None,
    wpm: Annotated[Optional[int], typer.Option("--words-per-minute", help="Reading rate")] = None,
    max_tags: Annotated[Optional[int], typer.Option("--max-tags", help="Max tags kept per post")] = None,
    excerpt_mode: Annotated[Optional[str], typer.Option("--excerpt-mode", help="regex or markdown")] = None,
    ):
    """Run the full pipeline: load -> validate -> assemble -> export."""
    settings = _settings(overrides={
        "output_dir": out, "output_format": fmt, "excerpt_length": excerpt_length,
        "words_per_minute": wpm, "max_tags": max_tags, "excerpt_mode": excerpt_mode,
    })
    src = _source(path, settings)
    result = _run(src, settings)
    _echo_rejected(result.rejected)

    output_dir = Path(settings.output_dir)
    try:
        exported = write_collection(result.records, output_dir, settings.output_format)
    except OSError as e:
        _fail("Export failed", e)
    for slug, mdx_path in exported:
        typer.echo(f"  {slug} -> {mdx_path}")
    typer.echo(
        f"Exported {len(exported)} post(s) to {output_dir}/ - "
        f"{result.drafts} draft(s) skipped, {len(result.rejected)} rejected"
    )


def check_cmd(
    path: Annotated[Optional[str], typer.Argument(help="File or directory of posts")] = None,
    ):
    """Validate posts without writing output; exit 1 if any post is rejected."""
    settings = _settings()
    result = _run(_source(path, settings), settings)
    _echo_rejected(result.rejected)
    if result.rejected:
        raise typer.Exit(1)
    typer.echo(f"OK - {len(result.records)} post(s), {result.drafts} draft(s)")


def list_cmd(
    path: Annotated[Optional[str], typer.Argument(help="File or directory of posts")] = None,
    tag: Annotated[Optional[str], typer.Option("--tag", help="Only posts carrying this tag")] = None,
    ):
    """List published posts newest first."""
    settings = _settings()
    result = _run(_source(path, settings), settings)
    records = [r for r in result.records if tag is None or tag.strip().lower() in r.tags]
    if not records:
        typer.echo("No published posts found.")
        raise typer.Exit(1)
    for r in records:
        typer.echo(f"{format_date(r.publish_date):<20} {r.slug}  ({r.reading_time_minutes} min)")


def show_cmd(
    slug: Annotated[str, typer.Argument(help="Slug of a published post")],
    path: Annotated[Optional[str], typer.Option("--path", help="File or directory of posts")] = None,
    ):
    """Print the derived metadata of one published post."""
    settings = _settings()
    result = _run(_source(path, settings), settings)
    record = get_by_slug(result.records, slug)
    if record is None:
        _fail(f"No published post with slug '{slug}'")
    typer.echo(record.title)
    typer.echo(f"  identifier: {record.identifier}")
    typer.echo(f"  date:       {format_date(record.publish_date)}")
    typer.echo(f"  author:     {record.author}")
    typer.echo(f"  tags:       {', '.join(record.tags) or '-'}")
    typer.echo(f"  reading:    {record.reading_time_minutes} min")
    typer.echo(f"  excerpt:    {record.excerpt}")
