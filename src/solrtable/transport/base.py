"""Transport contract expected by ``SolrDataSource``."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from solrtable.models.request import SolrRequest, UpdateRequest


@runtime_checkable
class Transport(Protocol):
    """Executes built requests against Solr.

    Implementations raise ``TransportError`` when Solr is unreachable or
    rejects a request, and return the decoded JSON reply otherwise.
    """

    async def execute(self, request: SolrRequest) -> dict[str, Any]: ...

    async def update(self, request: UpdateRequest) -> dict[str, Any]: ...
