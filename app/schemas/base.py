"""Shared schema configuration."""

from typing import Any, ClassVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Schema exchanged with the client as camelCase JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PartialUpdate(CamelModel):
    """
    Base for partial-update payloads.

    Only declared fields are accepted; anything else in the body (including
    ``id``, ``userId`` and ``createdAt``) is dropped during parsing.
    """

    # Fields whose column is NOT NULL; an explicit null leaves them unchanged
    non_nullable: ClassVar[frozenset[str]] = frozenset()

    def to_patch(self) -> dict[str, Any]:
        """Return the fields the client actually sent, keyed by attribute name."""
        patch = {}
        for field, value in self.model_dump(exclude_unset=True).items():
            if value is None and field in self.non_nullable:
                continue
            patch[field] = value
        return patch


def blank_to_none(value: Any) -> Any:
    """Treat empty optional form fields as absent."""
    if isinstance(value, str) and not value.strip():
        return None
    return value
