"""Shared test fixtures and configuration."""

from __future__ import annotations

from typing import Any

import pytest

from solrtable.config.settings import Settings
from solrtable.models.schema import EntitySchema, FieldSchema


@pytest.fixture
def settings() -> Settings:
    """Create a test Settings instance with defaults."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        solr={"host": "solr.test", "core": "articles"},
    )


@pytest.fixture
def article() -> EntitySchema:
    """Article entity: id/title/body stored as-is, dates stored as epoch integers."""
    return EntitySchema(
        name="Article",
        primary_key="id",
        fields={
            "id": FieldSchema(logical_type="integer", source_type="integer", nullable=False, length=11, key="primary"),
            "title": FieldSchema(logical_type="text", source_type="text"),
            "body": FieldSchema(logical_type="text", source_type="text"),
            "created": FieldSchema(logical_type="integer", source_type="date"),
            "modified": FieldSchema(logical_type="integer", source_type="date"),
        },
    )


@pytest.fixture
def mixed_entity() -> EntitySchema:
    """Entity exercising the string <-> integer rules."""
    return EntitySchema(
        name="Listing",
        fields={
            "id": FieldSchema(logical_type="string", source_type="integer"),
            "views": FieldSchema(logical_type="integer", source_type="string"),
            "title": FieldSchema(logical_type="text", source_type="text"),
        },
    )


@pytest.fixture
def sample_docs() -> list[dict[str, Any]]:
    return [
        {"id": "Article.1", "title": "Solr as a table", "created": 1579046400},
        {"id": "Article.2", "title": "Filter queries explained", "created": 1579132800},
    ]


@pytest.fixture
def select_response(sample_docs: list[dict[str, Any]]) -> dict[str, Any]:
    """Sample Solr JSON reply from /select."""
    return {
        "responseHeader": {"status": 0, "QTime": 2},
        "response": {"numFound": 42, "start": 0, "docs": sample_docs},
    }


@pytest.fixture
def update_ok() -> dict[str, Any]:
    """Sample Solr JSON reply from /update."""
    return {"responseHeader": {"status": 0, "QTime": 11}}
