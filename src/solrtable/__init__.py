"""solrtable: use an Apache Solr core as an ORM-style table.

Translates generic query descriptors into Solr select, more-like-this and
count requests, and coerces record values to Solr field types before
writes.
"""

from solrtable.coercion import CoercionRegistry, DocumentCoercer, default_registry
from solrtable.datasource import SolrDataSource, identity_projection, wrap_by_entity
from solrtable.exceptions import (
    ConfigurationError,
    SolrTableError,
    StatusError,
    TransportError,
    ValidationError,
)
from solrtable.models import (
    COUNT,
    Conditions,
    EntitySchema,
    FieldSchema,
    MoreLikeThis,
    QueryDescriptor,
    ResultSet,
    SolrRequest,
    UpdateRequest,
    WriteResult,
)
from solrtable.translator import QueryTranslator
from solrtable.transport import SolrTransport

__version__ = "0.2.0"

__all__ = [
    "COUNT",
    "CoercionRegistry",
    "Conditions",
    "ConfigurationError",
    "DocumentCoercer",
    "EntitySchema",
    "FieldSchema",
    "MoreLikeThis",
    "QueryDescriptor",
    "QueryTranslator",
    "ResultSet",
    "SolrDataSource",
    "SolrRequest",
    "SolrTableError",
    "SolrTransport",
    "StatusError",
    "TransportError",
    "UpdateRequest",
    "ValidationError",
    "WriteResult",
    "__version__",
    "default_registry",
    "identity_projection",
    "wrap_by_entity",
]
