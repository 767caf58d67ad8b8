"""Solr transport layer: the HTTP collaborator that actually talks to Solr.

Anything exposing ``execute(SolrRequest)`` and ``update(UpdateRequest)``
coroutines can stand in for ``SolrTransport``.
"""

from solrtable.transport.base import Transport
from solrtable.transport.client import SolrTransport, TransportHealth

__all__ = ["SolrTransport", "Transport", "TransportHealth"]
