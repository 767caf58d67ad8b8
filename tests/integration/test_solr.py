"""Integration tests for SolrDataSource against a real Solr core."""

from __future__ import annotations

import pytest

from solrtable.datasource import SolrDataSource
from solrtable.models.query import COUNT, Conditions, QueryDescriptor
from solrtable.models.schema import EntitySchema, FieldSchema
from solrtable.transport.client import SolrTransport

pytestmark = [pytest.mark.integration, pytest.mark.solr]


@pytest.fixture
def article() -> EntitySchema:
    return EntitySchema(
        name="Article",
        fields={
            "id": FieldSchema(logical_type="string", source_type="string"),
            "title": FieldSchema(logical_type="text", source_type="text"),
            "created": FieldSchema(logical_type="integer", source_type="date"),
        },
    )


@pytest.fixture
async def source(solr_ready):
    transport = SolrTransport(base_url=solr_ready, core="articles")
    await transport.initialize()
    yield SolrDataSource(transport)
    await transport.shutdown()


class TestSolrRead:
    async def test_select(self, source, article):
        result = await source.read(article, QueryDescriptor(conditions=Conditions(query="title:solr")))
        assert result.ok
        assert result.total_matched >= 1
        assert all("Article" in row for row in result.rows)

    async def test_filter_and_sort(self, source, article):
        result = await source.read(
            article,
            QueryDescriptor(
                order=["created desc"],
                conditions=Conditions(query="*:*", filters={"recent": "created:[1579100000 TO *]"}),
            ),
        )
        ids = [row["Article"]["id"] for row in result.rows]
        assert ids == ["Article.3", "Article.2"]

    async def test_count(self, source, article):
        result = await source.read(article, QueryDescriptor(fields=COUNT, conditions=Conditions(query="*:*")))
        assert result.rows == [{"count": 3}]


class TestSolrWrite:
    async def test_create_then_delete(self, source, article):
        created = await source.create(article, ["id", "title", "created"], ["Article.99", "Temp", "2020-01-15 00:00:00"])
        assert created

        found = await source.read(article, QueryDescriptor(conditions=Conditions(query="id:Article.99")))
        assert found.rows[0]["Article"]["created"] == 1579046400

        deleted = await source.delete(article, 99)
        assert deleted
        gone = await source.read(article, QueryDescriptor(fields=COUNT, conditions=Conditions(query="id:Article.99")))
        assert gone.total_matched == 0
