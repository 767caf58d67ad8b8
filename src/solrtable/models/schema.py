"""Entity schema models: per-field type declarations driving coercion."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from solrtable.exceptions import ValidationError


class FieldSchema(BaseModel):
    """Declared types of a single field.

    ``logical_type`` is what Solr stores, ``source_type`` is what the
    application hands in. The short keys used by ORM schema tables
    (``type``, ``source``, ``null``) are accepted as aliases::

        FieldSchema.model_validate({"type": "integer", "source": "date", "null": True})
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    logical_type: str = Field(alias="type", description="Engine-facing field type")
    source_type: str = Field(alias="source", description="Application-facing field type")
    nullable: bool = Field(default=True, alias="null", description="Whether the field may be null")
    default: Any = Field(default=None, description="Default value")
    length: int | None = Field(default=None, description="Declared length, if any")
    key: str | None = Field(default=None, description="Key kind, e.g. 'primary'")

    @property
    def needs_coercion(self) -> bool:
        return self.logical_type != self.source_type


class EntitySchema(BaseModel):
    """Schema of one logical entity stored in a Solr core.

    Several entity types may share a core; document ids are namespaced as
    ``"<name>.<primary key>"`` to keep them apart.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Entity display name, used to wrap rows and namespace ids")
    primary_key: str = Field(default="id", description="Primary-key field name")
    fields: dict[str, FieldSchema] = Field(default_factory=dict, description="Ordered field table")

    def describe(self) -> dict[str, dict[str, Any]]:
        """Return the field table in the short-key form ORM schema tables use."""
        return {
            name: field.model_dump(by_alias=True, exclude_none=True)
            | {"default": field.default}
            for name, field in self.fields.items()
        }

    def document_key(self, identifier: Any) -> str:
        """Compose the namespaced Solr document id for a primary-key value.

        ``identifier`` may be the bare key value, an id that is already
        namespaced, or an ORM conditions mapping keyed by
        ``"<name>.<primary_key>"``.
        """
        if isinstance(identifier, Mapping):
            qualified = f"{self.name}.{self.primary_key}"
            if qualified not in identifier:
                raise ValidationError(f"Delete conditions lack the key field '{qualified}'")
            identifier = identifier[qualified]
        value = str(identifier)
        prefix = f"{self.name}."
        if value.startswith(prefix):
            return value
        return prefix + value
