"""Data models for the content pipeline: raw documents, validated shells, page-ready records"""

from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from mdblog.errors import SchemaError


@dataclass
class RawDoc:
    """Loader output for one source file; frontmatter is untyped."""
    identifier:  str                 # source path relative to the content root, no extension
    path:        Path
    frontmatter: dict[str, Any]
    body:        str                 # frontmatter stripped


class PostFrontmatter(BaseModel):
    """Typed and defaulted frontmatter of a single post; no derived fields."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    title:        str
    description:  str
    publish_date: date = Field(alias="publishDate")
    author:       str
    tags:         list[Any] = Field(default_factory=list)
    image:        Optional[str] = None
    draft:        bool = False

    @field_validator("title", "description", "author")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise PydanticCustomError("blank_string", "must not be blank")
        return v

    @field_validator("publish_date", mode="before")
    @classmethod
    def _coerce_date(cls, v: Any) -> Any:
        # YAML yields datetime for timestamps; keep only the calendar date.
        if isinstance(v, datetime):
            return v.date()
        # pydantic would read numbers as Unix timestamps.
        if isinstance(v, (bool, int, float)) or (isinstance(v, str) and v.strip().isdigit()):
            raise PydanticCustomError("date_type", "publishDate must be a calendar date, not a number")
        if isinstance(v, str):
            try:
                return datetime.fromisoformat(v.strip()).date()
            except ValueError:
                return v
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def _coerce_tags(cls, v: Any) -> Any:
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        if not isinstance(v, (list, tuple)):
            raise PydanticCustomError("tags_type", "tags must be a list")
        return [str(t) if isinstance(t, (int, float)) and not isinstance(t, bool) else t for t in v]

    @field_validator("draft", mode="before")
    @classmethod
    def _default_draft(cls, v: Any) -> Any:
        return False if v is None else v


class ContentRecord(BaseModel):
    """A validated post with derived fields, ready for a page renderer."""
    model_config = ConfigDict(frozen=True)

    identifier:           str
    slug:                 str
    title:                str
    description:          str
    publish_date:         date
    author:               str
    tags:                 tuple[str, ...] = ()
    image:                Optional[str] = None
    draft:                bool = False
    body:                 str = ""
    reading_time_minutes: int = Field(default=1, ge=1)
    excerpt:              str = ""


@dataclass
class ValidationResult:
    """Either a validated shell or the reason the document was rejected."""
    identifier: str
    shell:      Optional[PostFrontmatter] = None
    error:      Optional[SchemaError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class PipelineResult:
    records:  list[ContentRecord] = field(default_factory=list)
    rejected: list[SchemaError] = field(default_factory=list)
    drafts:   int = 0
