"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field


CONFIG_FILE = "config.yaml"


class PipelineConfig(BaseModel):
    """Immutable thresholds handed to each content derivation function."""
    model_config = ConfigDict(frozen=True)

    words_per_minute: int = Field(default=200,    ge=1)
    excerpt_length:   int = Field(default=160,    ge=1)
    max_tags:         int = Field(default=10,     ge=0)
    max_body_length:  int = Field(default=100_000, ge=1)
    excerpt_mode:     str = Field(default="regex", pattern="^(regex|markdown)$")
    parser_config:    str = "gfm-like"


class Settings(BaseModel):
    content_dir:      str = Field(default="src/content/blog", description="Directory scanned for .md/.mdx posts")
    output_dir:       str = Field(default="dist",  description="Directory for standardized MD/MDX + JSON files")
    output_format:    str = Field(default="mdx",   pattern="^(md|mdx)$", description="md or mdx")
    parser_config:    str = Field(default="gfm-like", description="MarkdownIt parser preset name")
    excerpt_mode:     str = Field(default="regex", pattern="^(regex|markdown)$",
                                  description="regex strips tags from the raw body; markdown renders it first")
    words_per_minute: int = Field(default=200,     ge=1, description="Reading rate for reading time")
    excerpt_length:   int = Field(default=160,     ge=1, description="Max excerpt length before the ellipsis")
    max_tags:         int = Field(default=10,      ge=0, description="Max tags kept per post")
    max_body_length:  int = Field(default=100_000, ge=1, description="Body chars considered for reading time")
    log_level:        str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR)$")

    @property
    def pipeline(self) -> PipelineConfig:
        return PipelineConfig(
            words_per_minute=self.words_per_minute,
            excerpt_length=self.excerpt_length,
            max_tags=self.max_tags,
            max_body_length=self.max_body_length,
            excerpt_mode=self.excerpt_mode,
            parser_config=self.parser_config,
        )


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then MDBLOG_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"MDBLOG_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
