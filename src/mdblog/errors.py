"""Pipeline error types: per-record schema failures and fatal collection failures"""


class SchemaError(Exception):
    """A single post failed validation; the post is dropped and the build continues.

    kind is one of: missing-field, bad-date, wrong-type, invalid-slug, bad-frontmatter.
    """

    def __init__(self, identifier: str, field: str, kind: str, message: str = ""):
        self.identifier = identifier
        self.field = field
        self.kind = kind
        self.message = message
        detail = f": {message}" if message else ""
        super().__init__(f"{identifier}: {kind} ({field}){detail}")


class CollectionError(Exception):
    """Two or more published posts share a slug; the build must abort.

    conflicts maps each clashing slug to the identifiers that produced it;
    rejected holds the per-record failures found in the same run.
    """

    def __init__(self, conflicts: dict[str, list[str]], rejected: list[SchemaError] = None):
        self.conflicts = conflicts
        self.rejected = rejected or []
        parts = [f"'{slug}' <- {', '.join(ids)}" for slug, ids in conflicts.items()]
        super().__init__(f"duplicate slug: {'; '.join(parts)}")

    @property
    def identifiers(self) -> list[str]:
        return [i for ids in self.conflicts.values() for i in ids]
