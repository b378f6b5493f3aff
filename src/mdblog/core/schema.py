"""Frontmatter schema validation with tagged results instead of exceptions"""

from typing import Any

from pydantic import ValidationError

from mdblog.core.models import PostFrontmatter, ValidationResult
from mdblog.errors import SchemaError


DATE_FIELDS = {"publishDate", "publish_date"}
MISSING_TYPES = {"missing", "blank_string"}


def _to_schema_error(identifier: str, exc: ValidationError) -> SchemaError:
    """Map the first pydantic error (schema field order) to a SchemaError."""
    err = exc.errors()[0]
    field = str(err["loc"][0]) if err["loc"] else "frontmatter"
    if err["type"] in MISSING_TYPES:
        kind = "missing-field"
    elif field in DATE_FIELDS:
        kind = "bad-date"
    else:
        kind = "wrong-type"
    return SchemaError(identifier, field, kind, err["msg"])


def validate_frontmatter(identifier: str, frontmatter: Any) -> ValidationResult:
    """Validate a raw frontmatter mapping into a PostFrontmatter shell.

    Never raises for malformed input; the failure is carried on the result.
    """
    if not isinstance(frontmatter, dict):
        error = SchemaError(identifier, "frontmatter", "bad-frontmatter",
                            f"expected a mapping, got {type(frontmatter).__name__}")
        return ValidationResult(identifier, error=error)
    try:
        shell = PostFrontmatter.model_validate(frontmatter)
    except ValidationError as e:
        return ValidationResult(identifier, error=_to_schema_error(identifier, e))
    return ValidationResult(identifier, shell=shell)
