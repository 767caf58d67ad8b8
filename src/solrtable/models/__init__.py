"""Data models shared by the translator, the coercer and the data source."""

from solrtable.models.query import COUNT, Conditions, MoreLikeThis, QueryDescriptor
from solrtable.models.request import SolrRequest, UpdateRequest
from solrtable.models.result import ResultSet, WriteResult
from solrtable.models.schema import EntitySchema, FieldSchema

__all__ = [
    "COUNT",
    "Conditions",
    "EntitySchema",
    "FieldSchema",
    "MoreLikeThis",
    "QueryDescriptor",
    "ResultSet",
    "SolrRequest",
    "UpdateRequest",
    "WriteResult",
]
