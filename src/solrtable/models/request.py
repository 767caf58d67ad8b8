"""Solr request models produced by the translator and the write path."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, model_validator


def _param_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class SolrRequest(BaseModel):
    """A read against one Solr request handler (``select`` or ``mlt``)."""

    handler: str = Field(default="select", description="Request handler path under the core")
    query: str | None = Field(default=None, description="Main query (``q``)")
    fields: str | None = Field(default=None, description="Returned fields (``fl``)")
    sort: dict[str, str] = Field(default_factory=dict, description="Field -> direction")
    start: int | None = Field(default=None, description="Offset (``start``)")
    rows: int | None = Field(default=None, description="Row count (``rows``)")
    filter_queries: dict[str, str] = Field(default_factory=dict, description="Named filter queries (``fq``)")
    params: dict[str, Any] = Field(default_factory=dict, description="Handler-specific and passthrough params")
    body: str | None = Field(default=None, description="Raw text content stream, e.g. more-like-this seed text")

    @property
    def is_more_like_this(self) -> bool:
        return self.handler == "mlt"

    def to_params(self) -> list[tuple[str, str]]:
        """Flatten into HTTP query parameters; ``fq`` repeats once per filter."""
        out: list[tuple[str, str]] = [("wt", "json")]
        if self.query:
            out.append(("q", self.query))
        if self.fields:
            out.append(("fl", self.fields))
        if self.sort:
            out.append(("sort", ",".join(f"{f} {d}" for f, d in self.sort.items())))
        if self.start is not None:
            out.append(("start", str(self.start)))
        if self.rows is not None:
            out.append(("rows", str(self.rows)))
        for fq in self.filter_queries.values():
            out.append(("fq", fq))
        for key, value in self.params.items():
            if isinstance(value, (list, tuple)):
                out.extend((key, _param_value(v)) for v in value)
            else:
                out.append((key, _param_value(value)))
        return out

    def __str__(self) -> str:
        line = f"/{self.handler}?" + "&".join(f"{k}={v}" for k, v in self.to_params())
        if self.body is not None:
            line += f" body={self.body!r}"
        return line


class UpdateRequest(BaseModel):
    """An update-handler call: documents to add or ids to delete, then commit."""

    documents: list[dict[str, Any]] = Field(default_factory=list, description="Documents to add")
    delete_ids: list[str] = Field(default_factory=list, description="Document ids to delete")
    overwrite: bool = Field(default=True, description="Replace documents sharing a unique key")
    commit: bool = Field(default=True, description="Issue an explicit commit")

    @model_validator(mode="after")
    def _one_kind(self) -> UpdateRequest:
        if self.documents and self.delete_ids:
            raise ValueError("An update request either adds documents or deletes ids, not both")
        return self

    @property
    def size(self) -> int:
        return len(self.documents) + len(self.delete_ids)

    def to_params(self) -> dict[str, str]:
        return {
            "wt": "json",
            "commit": _param_value(self.commit),
            "overwrite": _param_value(self.overwrite),
        }

    def to_body(self) -> list[dict[str, Any]] | dict[str, Any]:
        """JSON body: a document list for adds, a delete command otherwise."""
        if self.delete_ids:
            return {"delete": list(self.delete_ids)}
        return list(self.documents)
