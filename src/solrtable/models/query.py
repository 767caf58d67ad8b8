"""Query descriptor models: the generic, ORM-shaped description of a read."""

from __future__ import annotations

from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

COUNT: Final = "COUNT"
"""Sentinel for ``QueryDescriptor.fields`` requesting only the total-matched count."""

OrderSpec = str | dict[str, str] | bool | None


class Conditions(BaseModel):
    """Main query, named filter queries and passthrough request parameters."""

    model_config = ConfigDict(frozen=True)

    query: str | None = Field(default=None, description="Main query string (Solr ``q``)")
    filters: dict[str, str] = Field(
        default_factory=dict,
        description="Named filter queries, each sent as its own ``fq``",
    )
    params: dict[str, Any] = Field(
        default_factory=dict,
        description="Extra request parameters attached verbatim",
    )


class MoreLikeThis(BaseModel):
    """More-like-this settings: optional seed text and the fields to analyse.

    Seed text is POSTed to the ``mlt`` handler as a raw text content stream,
    so it needs neither ``enableStreamBody`` nor room in the URL.
    """

    model_config = ConfigDict(frozen=True)

    seed: str | None = Field(default=None, description="Seed text to find similar documents for")
    fields: str | list[str] | None = Field(
        default=None,
        description="Fields used for similarity (list or comma-separated string)",
    )

    @property
    def field_spec(self) -> str:
        """The field list as Solr's comma-joined ``mlt.fl`` value."""
        if not self.fields:
            return ""
        if isinstance(self.fields, str):
            return self.fields
        return ",".join(self.fields)


class QueryDescriptor(BaseModel):
    """A generic read request, translated into a Solr select, MLT or count query.

    ``order`` mirrors the ORM convention of a sequence whose first element
    is the effective sort; a bare string or mapping is wrapped for
    convenience. ``more_like_this`` accepts a ``MoreLikeThis`` or, as a
    shorthand, just the MLT field list.

    Example::

        QueryDescriptor(
            fields=["id", "title"],
            order="created desc",
            limit=20,
            conditions=Conditions(query="title:solr", filters={"type": "type:post"}),
        )
    """

    model_config = ConfigDict(frozen=True)

    fields: list[str] | str | None = Field(default=None, description="Returned fields, or COUNT")
    order: list[OrderSpec] = Field(default_factory=list, description="Sort spec; first entry wins")
    offset: int | None = Field(default=None, ge=0, description="Start index")
    limit: int | None = Field(default=None, ge=0, description="Row count")
    conditions: Conditions | None = Field(default=None, description="Query, filters and extra params")
    more_like_this: MoreLikeThis | None = Field(default=None, description="More-like-this mode settings")

    @field_validator("order", mode="before")
    @classmethod
    def _wrap_order(cls, v: Any) -> Any:
        if v is None or v is False:
            return []
        if isinstance(v, (str, dict)):
            return [v]
        return v

    @field_validator("more_like_this", mode="before")
    @classmethod
    def _parse_more_like_this(cls, v: Any) -> Any:
        """Accept a plain field list / string as the MLT field spec."""
        if isinstance(v, (str, list)):
            return MoreLikeThis(fields=v)
        return v

    @property
    def is_count(self) -> bool:
        return self.fields == COUNT
