"""Integration test fixtures: a Solr core seeded with Article documents.

Expects Solr to be running locally, e.g.:
    docker run -p 8983:8983 solr:9 solr-precreate articles
"""

from __future__ import annotations

import asyncio
import contextlib
import time

import httpx
import pytest

SOLR_URL = "http://localhost:8983/solr"
CORE = "articles"

MOCK_ARTICLES = [
    {"id": "Article.1", "title": "Solr as a relational table", "body": "Filter queries and sorting in Solr.", "created": 1579046400},
    {"id": "Article.2", "title": "Faceting basics", "body": "Facets summarise Solr result sets.", "created": 1579132800},
    {"id": "Article.3", "title": "More like this", "body": "Finding similar Solr documents with MLT.", "created": 1579219200},
]


def _wait_for_service(url: str, timeout: float = 60.0) -> bool:
    """Block until *url* returns HTTP 200, or timeout."""
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        try:
            r = httpx.get(url, timeout=5)
            if r.status_code == 200:
                return True
        except httpx.HTTPError:
            pass
        time.sleep(2)
    return False


async def _seed_solr(host: str = SOLR_URL, core: str = CORE) -> None:
    async with httpx.AsyncClient(base_url=host, timeout=30) as client:
        for field in [
            {"name": "title", "type": "text_general", "stored": True},
            {"name": "body", "type": "text_general", "stored": True, "termVectors": True},
            {"name": "created", "type": "plong", "stored": True},
        ]:
            with contextlib.suppress(httpx.HTTPError):
                await client.post(f"/{core}/schema", json={"add-field": field})

        await client.post(f"/{core}/update", json={"delete": {"query": "*:*"}}, params={"commit": "true"})
        resp = await client.post(f"/{core}/update", json=MOCK_ARTICLES, params={"commit": "true"})
        resp.raise_for_status()


@pytest.fixture(scope="session")
def solr_ready() -> str:
    """Ensure Solr is running and seeded."""
    if not _wait_for_service(f"{SOLR_URL}/{CORE}/admin/ping", timeout=10.0):
        pytest.skip(f"Solr not available at {SOLR_URL}")
    asyncio.run(_seed_solr())
    return SOLR_URL
