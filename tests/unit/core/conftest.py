"""Shared fixtures for core unit tests"""

from datetime import date

import pytest

from mdblog.config import PipelineConfig
from mdblog.core.models import ContentRecord, RawDoc


VALID_FM = {
    "title": "Hello World",
    "description": "First post.",
    "publishDate": date(2024, 1, 15),
    "author": "Jane Doe",
    "tags": ["Python", "Web-Design"],
}


@pytest.fixture(name="config")
def config_fixture():
    return PipelineConfig()


@pytest.fixture(name="frontmatter")
def frontmatter_fixture():
    return dict(VALID_FM)


@pytest.fixture(name="make_doc")
def make_doc_fixture(tmp_path):
    """Factory for RawDoc instances with valid frontmatter unless overridden."""
    def _make(identifier: str = "hello-world", body: str = "Hello world.", **fm):
        data = {**VALID_FM, **fm}
        return RawDoc(identifier=identifier, path=tmp_path / f"{identifier}.md", frontmatter=data, body=body)
    return _make


@pytest.fixture(name="make_record")
def make_record_fixture():
    """Factory for ContentRecord instances with sensible defaults."""
    def _make(identifier: str, publish_date: date = date(2024, 1, 15), slug: str = None, **fields):
        fields.setdefault("title", identifier.title())
        fields.setdefault("description", "desc")
        fields.setdefault("author", "Jane Doe")
        return ContentRecord(identifier=identifier, slug=slug or identifier, publish_date=publish_date, **fields)
    return _make
