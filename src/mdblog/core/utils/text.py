"""Derived text fields: reading time, excerpts, plain-text projection, display helpers"""

import math
import re
from datetime import date, datetime
from urllib.parse import urlparse

from markdown_it import MarkdownIt

from mdblog.config import PipelineConfig


ELLIPSIS = "..."

# Not an HTML parser: only removes simple <...> spans.
_TAG_RE = re.compile(r'<[^>]*>')
_DISALLOWED_RE = re.compile(r'[^\w\s.,!?-]', re.ASCII)
_LAST_SPACE_RE = re.compile(r'^(.*)\s', re.DOTALL)

_INLINE_TEXT = {'text', 'code_inline'}
_INLINE_BREAKS = {'softbreak', 'hardbreak'}


def _make_parser(preset: str) -> MarkdownIt:
    """Build a MarkdownIt instance for the given preset name."""
    return MarkdownIt(preset, options_update={"linkify": False})


def reading_time(body: str, config: PipelineConfig = PipelineConfig()) -> int:
    """Estimated whole minutes to read body; never less than 1."""
    words = len(body[:config.max_body_length].split())
    return max(1, math.ceil(words / config.words_per_minute))


def plain_text(body: str, parser_config: str = 'gfm-like') -> str:
    """Project rendered markdown to its visible inline text (code blocks and raw HTML dropped)."""
    paragraphs = []
    for tok in _make_parser(parser_config).parse(body):
        if tok.type != 'inline' or not tok.children:
            continue
        text = ''.join(
            ' ' if c.type in _INLINE_BREAKS else c.content
            for c in tok.children
            if c.type in _INLINE_TEXT or c.type in _INLINE_BREAKS
        )
        if text.strip():
            paragraphs.append(text)
    return '\n\n'.join(paragraphs)


def generate_excerpt(text: str, max_length: int = 160) -> str:
    """Plain-text preview of text, cut at a word boundary when longer than max_length.

    Result length is at most max_length + len(ELLIPSIS).
    """
    plain = _DISALLOWED_RE.sub('', _TAG_RE.sub('', text)).strip()
    if len(plain) <= max_length:
        return plain

    # Whitespace sitting exactly at the cut point still counts as a boundary.
    m = _LAST_SPACE_RE.match(plain[:max_length + 1])
    if m and m.group(1).rstrip():
        return m.group(1).rstrip() + ELLIPSIS
    return plain[:max_length] + ELLIPSIS


def excerpt_for(body: str, config: PipelineConfig = PipelineConfig()) -> str:
    """Excerpt of a post body using the configured source projection."""
    source = plain_text(body, config.parser_config) if config.excerpt_mode == 'markdown' else body
    return generate_excerpt(source, config.excerpt_length)


def format_date(value: date | datetime | str) -> str:
    """Format a date for display, e.g. 'January 15, 2024'; 'Invalid date' when unparseable."""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.strip())
        except ValueError:
            return 'Invalid date'
    if not isinstance(value, date):
        return 'Invalid date'
    return f"{value:%B} {value.day}, {value.year}"


def is_valid_url(url: str) -> bool:
    """True only for absolute http(s) URLs with a host."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme in ('http', 'https') and bool(parsed.netloc)
