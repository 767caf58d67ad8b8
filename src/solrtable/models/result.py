"""Read and write result models.

Data source operations never raise for engine or input failures; they
return one of these with the cause attached, so callers can tell a
transport failure from a status failure without parsing logs.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from solrtable.exceptions import SolrTableError, StatusError, TransportError, ValidationError

ErrorKind = Literal["transport", "status", "validation"]


def _error_kind(error: SolrTableError | None) -> ErrorKind | None:
    if isinstance(error, TransportError):
        return "transport"
    if isinstance(error, StatusError):
        return "status"
    if isinstance(error, ValidationError):
        return "validation"
    return None


class ResultSet(BaseModel):
    """Rows returned by a read, plus the total-matched count of the whole query."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    rows: list[dict[str, Any]] = Field(default_factory=list, description="One mapping per matched document")
    total_matched: int = Field(default=0, description="numFound for the whole query, not per row")
    interesting_terms: list[Any] | None = Field(default=None, description="MLT interesting terms, if requested")
    error: SolrTableError | None = Field(default=None, description="Cause of failure, if the read failed")

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_kind(self) -> ErrorKind | None:
        return _error_kind(self.error)

    def raise_for_error(self) -> None:
        """Raise the attached error, if any."""
        if self.error is not None:
            raise self.error


class WriteResult(BaseModel):
    """Outcome of a create, update, batch or delete.

    Truthiness follows ``success`` so the result can stand in for the
    plain boolean ORM datasources expect.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    success: bool = Field(description="True when Solr acknowledged the write with status 0")
    status: int | None = Field(default=None, description="Solr responseHeader.status, if a reply arrived")
    documents: int = Field(default=0, description="Documents (or ids) submitted")
    error: SolrTableError | None = Field(default=None, description="Cause of failure")

    def __bool__(self) -> bool:
        return self.success

    @property
    def error_kind(self) -> ErrorKind | None:
        return _error_kind(self.error)

    @classmethod
    def failed(cls, error: SolrTableError, *, documents: int = 0) -> WriteResult:
        status = error.status if isinstance(error, StatusError) else None
        return cls(success=False, status=status, documents=documents, error=error)

    def raise_for_error(self) -> None:
        """Raise the attached error, if any."""
        if self.error is not None:
            raise self.error
