"""Solr data source: ORM-style CRUD over a Solr core.

Ties the translator, the coercer and a transport together. This is the
error boundary: transport, status and validation failures come back as
``ResultSet.error`` / ``WriteResult.error`` instead of being raised.

Usage::

    async with SolrTransport(base_url="http://localhost:8983/solr", core="articles") as transport:
        source = SolrDataSource(transport)
        result = await source.read(article, QueryDescriptor(conditions=Conditions(query="solr")))
        for row in result.rows:
            print(row["Article"]["title"])
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from solrtable.coercion import DocumentCoercer
from solrtable.exceptions import SolrTableError, StatusError, TransportError, ValidationError
from solrtable.models.query import COUNT, Conditions, QueryDescriptor
from solrtable.models.request import SolrRequest, UpdateRequest
from solrtable.models.result import ResultSet, WriteResult
from solrtable.models.schema import EntitySchema
from solrtable.transport.base import Transport
from solrtable.translator import QueryTranslator

logger = logging.getLogger(__name__)

RowProjection = Callable[[EntitySchema, ResultSet, QueryDescriptor], ResultSet]


def wrap_by_entity(entity: EntitySchema, result: ResultSet, descriptor: QueryDescriptor) -> ResultSet:
    """Nest every row under the entity name, the way ORM result rows are shaped."""
    if descriptor.is_count:
        return result
    rows = [{entity.name: row} for row in result.rows]
    return result.model_copy(update={"rows": rows})


def identity_projection(entity: EntitySchema, result: ResultSet, descriptor: QueryDescriptor) -> ResultSet:
    return result


class SolrDataSource:
    """Read/create/update/batch/delete for entities stored in one Solr core.

    Args:
        transport: Executes requests (usually a ``SolrTransport``).
        translator: Query translator; a fresh ``QueryTranslator`` by default.
        coercer: Document coercer; the built-in rules by default.
        projection: Row projection applied to every successful read;
            ``wrap_by_entity`` by default.
    """

    def __init__(
        self,
        transport: Transport,
        *,
        translator: QueryTranslator | None = None,
        coercer: DocumentCoercer | None = None,
        projection: RowProjection = wrap_by_entity,
    ) -> None:
        self._transport = transport
        self._translator = translator or QueryTranslator()
        self._coercer = coercer or DocumentCoercer()
        self._projection = projection

    # ── Schema ───────────────────────────────────────────────────────────

    def describe(self, entity: EntitySchema) -> dict[str, dict[str, Any]]:
        """Return the entity's field table."""
        return entity.describe()

    def calculate(self, entity: EntitySchema, kind: str = "count") -> str:
        """Return the ``fields`` value that turns a read into a count.

        Counting is the only calculation Solr reads support here, so every
        ``kind`` maps to ``COUNT``.
        """
        return COUNT

    # ── Read ─────────────────────────────────────────────────────────────

    async def read(self, entity: EntitySchema, descriptor: QueryDescriptor) -> ResultSet:
        """Run a select, more-like-this or count query.

        Returns:
            The projected rows with ``total_matched``, or an empty
            ``ResultSet`` carrying the error when the read failed.
        """
        try:
            request = self._translator.build(descriptor)
        except ValidationError as e:
            logger.error("Invalid query for %s: %s", entity.name, e)
            return ResultSet(error=e)

        try:
            raw = await self._transport.execute(request)
            result = self._translator.parse(raw, descriptor)
        except SolrTableError as e:
            self._log_failed_read(e, request)
            return ResultSet(error=e)

        return self._projection(entity, result, descriptor)

    async def count(self, entity: EntitySchema, conditions: Conditions | None = None) -> ResultSet:
        """Count matching documents; the single row is ``{"count": n}``."""
        return await self.read(entity, QueryDescriptor(fields=COUNT, conditions=conditions))

    # ── Write ────────────────────────────────────────────────────────────

    async def create(
        self,
        entity: EntitySchema,
        fields: Sequence[str],
        values: Sequence[Any],
    ) -> WriteResult:
        """Index one document built from parallel field and value lists."""
        if len(fields) != len(values):
            error = ValidationError(f"{len(fields)} fields but {len(values)} values for {entity.name}")
            logger.error("Solr create rejected: %s", error)
            return WriteResult.failed(error)

        try:
            document = self._coercer.coerce(dict(zip(fields, values, strict=True)), entity)
        except ValidationError as e:
            logger.error("Solr create rejected: %s", e)
            return WriteResult.failed(e)

        return await self._submit(UpdateRequest(documents=[document]), "create")

    async def update(
        self,
        entity: EntitySchema,
        fields: Sequence[str],
        values: Sequence[Any],
        conditions: Any = None,
    ) -> WriteResult:
        """Overwrite a whole document; Solr's add-with-overwrite is the upsert."""
        return await self.create(entity, fields, values)

    async def batch(self, entity: EntitySchema, records: Sequence[Mapping[str, Any]]) -> WriteResult:
        """Index many entity-keyed records (``{entity.name: {...}}``) with one commit."""
        if not records:
            return WriteResult(success=True, documents=0)

        documents: list[dict[str, Any]] = []
        try:
            for position, record in enumerate(records):
                if entity.name not in record:
                    raise ValidationError(f"Batch record {position} has no '{entity.name}' key")
                documents.append(self._coercer.coerce(record[entity.name], entity))
        except ValidationError as e:
            logger.error("Solr batch rejected: %s", e)
            return WriteResult.failed(e)

        return await self._submit(UpdateRequest(documents=documents), "batch")

    async def delete(self, entity: EntitySchema, identifier: Any) -> WriteResult:
        """Delete the document whose id is ``"<entity.name>.<primary key>"``."""
        try:
            doc_id = entity.document_key(identifier)
        except ValidationError as e:
            logger.error("Solr delete rejected: %s", e)
            return WriteResult.failed(e)

        return await self._submit(UpdateRequest(delete_ids=[doc_id]), "delete")

    async def _submit(self, request: UpdateRequest, operation: str) -> WriteResult:
        """Send an update and read Solr's status; 0 means success."""
        try:
            raw = await self._transport.update(request)
            header = raw.get("responseHeader") if isinstance(raw, Mapping) else None
            if not isinstance(header, Mapping):
                raise TransportError("Solr reply has no 'responseHeader'")
            status = header.get("status")
            if not isinstance(status, int) or isinstance(status, bool):
                raise TransportError(f"Solr reply has no usable status: {status!r}")
            if status != 0:
                raise StatusError(status)
        except SolrTableError as e:
            logger.error("Solr %s failed: %s", operation, e)
            return WriteResult.failed(e, documents=request.size)

        logger.debug("Solr %s committed %d document(s)", operation, request.size)
        return WriteResult(success=True, status=status, documents=request.size)

    @staticmethod
    def _log_failed_read(error: SolrTableError, request: SolrRequest) -> None:
        logger.error("Solr read failed: %s", error)
        logger.error("Attempted query: %s", request)
