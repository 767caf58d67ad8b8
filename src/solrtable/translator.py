"""Query translator: ``QueryDescriptor`` to Solr request, Solr response to rows.

The translator is pure: it never talks to Solr and keeps no state between
calls. Its rows are plain documents; wrapping them for an ORM is the data
source's projection step.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from solrtable.exceptions import TransportError, ValidationError
from solrtable.models.query import QueryDescriptor
from solrtable.models.request import SolrRequest
from solrtable.models.result import ResultSet

SORT_DIRECTIONS = ("asc", "desc")


class QueryTranslator:
    """Maps query descriptors onto Solr's select and more-like-this handlers.

    Build rules:
      - a ``more_like_this`` value selects the ``mlt`` handler
      - ``fields`` becomes ``fl`` (``COUNT`` instead forces ``rows=1``)
      - the first ``order`` entry becomes ``sort``
      - ``offset``/``limit`` become ``start``/``rows``
      - each named filter becomes its own ``fq``; extra params pass through
    """

    def build(self, descriptor: QueryDescriptor) -> SolrRequest:
        """Translate a descriptor into a Solr request.

        Raises:
            ValidationError: If the sort specification cannot be interpreted.
        """
        request = SolrRequest()

        mlt = descriptor.more_like_this
        if mlt is not None:
            request.handler = "mlt"
            request.params["mlt.interestingTerms"] = "list"
            if mlt.field_spec:
                request.params["mlt.fl"] = mlt.field_spec
            if mlt.seed:
                request.body = mlt.seed

        if descriptor.fields is not None and not descriptor.is_count:
            fields = descriptor.fields
            request.fields = fields if isinstance(fields, str) else ",".join(fields)

        if descriptor.order and descriptor.order[0]:
            request.sort = self.parse_sort(descriptor.order[0])

        if descriptor.offset is not None:
            request.start = descriptor.offset
        if descriptor.is_count:
            request.rows = 1
        elif descriptor.limit is not None:
            request.rows = descriptor.limit

        conditions = descriptor.conditions
        if conditions is not None:
            if conditions.query:
                request.query = conditions.query
            for name, fq in conditions.filters.items():
                request.filter_queries[name] = fq
            # Passthrough params go last so they can override anything above.
            request.params.update(conditions.params)

        return request

    def parse(self, response: Mapping[str, Any], descriptor: QueryDescriptor) -> ResultSet:
        """Turn a raw Solr JSON response into a ``ResultSet``.

        Raises:
            TransportError: If the response has no ``response`` section or
                no integer ``numFound``.
        """
        section = response.get("response")
        if not isinstance(section, Mapping):
            raise TransportError("Solr reply has no 'response' section")

        total = section.get("numFound", 0)
        if not isinstance(total, int) or isinstance(total, bool):
            raise TransportError(f"Solr reply has no usable numFound: {total!r}")
        if descriptor.is_count:
            return ResultSet(rows=[{"count": total}], total_matched=total)

        docs = section.get("docs", [])
        if not isinstance(docs, list) or not all(isinstance(doc, Mapping) for doc in docs):
            raise TransportError("Solr reply has malformed 'docs'")
        rows = [dict(doc) for doc in docs]
        interesting = response.get("interestingTerms") if descriptor.more_like_this is not None else None
        return ResultSet(
            rows=rows,
            total_matched=total,
            interesting_terms=list(interesting) if isinstance(interesting, list) else None,
        )

    @staticmethod
    def parse_sort(order: Any) -> dict[str, str]:
        """Interpret one sort entry: a ``{field: dir}`` mapping or ``"field dir"``."""
        if isinstance(order, Mapping):
            return {str(k): str(v) for k, v in order.items()}
        if not isinstance(order, str):
            raise ValidationError(f"Unsupported sort specification: {order!r}")

        parts = order.strip().split(" ", 1)
        if len(parts) != 2 or not parts[0]:
            raise ValidationError(f"Sort must look like '<field> <direction>', got {order!r}")
        field, direction = parts[0], parts[1].strip().lower()
        if direction not in SORT_DIRECTIONS:
            raise ValidationError(f"Unknown sort direction {parts[1]!r} for field '{field}'")
        return {field: direction}
