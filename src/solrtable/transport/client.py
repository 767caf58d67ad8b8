"""Solr transport: executes requests against one Solr core over HTTP.

Uses ``httpx`` (async). Reads go to ``/{core}/{handler}`` with ``wt=json``;
writes go to ``/{core}/update`` with a JSON body.

Usage::

    async with SolrTransport(base_url="http://localhost:8983/solr", core="articles") as transport:
        raw = await transport.execute(request)
"""

from __future__ import annotations

import logging
import time
from datetime import UTC, datetime
from typing import Any

import httpx
from pydantic import BaseModel, Field

from solrtable.exceptions import ConfigurationError, TransportError
from solrtable.models.request import SolrRequest, UpdateRequest

logger = logging.getLogger(__name__)


class TransportHealth(BaseModel):
    """Health status of the Solr core behind a transport."""

    status: str = Field(description="Health status: healthy, degraded, unhealthy")
    latency_ms: int = Field(default=0, description="Latency of the ping in ms")
    last_check: str | None = Field(default=None, description="ISO timestamp of the check")
    message: str | None = Field(default=None, description="Additional health message")


class SolrTransport:
    """Async HTTP transport for a single Solr core.

    Args:
        base_url: Solr base URL, e.g. ``"http://localhost:8983/solr"``.
        core: Core/collection name.
        username: Optional basic-auth username.
        password: Optional basic-auth password.
        timeout: Fixed HTTP timeout in seconds.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8983/solr",
        core: str = "collection1",
        username: str | None = None,
        password: str | None = None,
        timeout: float = 15.0,
    ) -> None:
        if not core:
            raise ConfigurationError("A Solr core name is required.")
        self._base_url = base_url.rstrip("/")
        self._core = core.strip("/")
        self._username = username
        self._password = password
        self._timeout = timeout
        self._client: httpx.AsyncClient | None = None

    @property
    def core(self) -> str:
        return self._core

    async def __aenter__(self) -> SolrTransport:
        await self.initialize()
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.shutdown()

    async def initialize(self) -> None:
        """Create the ``httpx.AsyncClient`` and ping the core."""
        auth = None
        if self._username and self._password:
            auth = httpx.BasicAuth(self._username, self._password)

        self._client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=httpx.Timeout(self._timeout),
            auth=auth,
        )

        try:
            resp = await self._client.get(f"/{self._core}/admin/ping", params={"wt": "json"})
            resp.raise_for_status()
            logger.info("Connected to Solr core '%s' at %s", self._core, self._base_url)
        except httpx.HTTPError as e:
            await self._client.aclose()
            self._client = None
            raise TransportError(f"Failed to connect to Solr: {e}") from e

    async def shutdown(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    # ── Requests ─────────────────────────────────────────────────────────

    async def execute(self, request: SolrRequest) -> dict[str, Any]:
        """Run a read request and return Solr's decoded JSON reply.

        A request carrying a text ``body`` (more-like-this seed text) is
        POSTed as a raw content stream; everything else is a GET.
        """
        client = self._require_client()
        url = f"/{self._core}/{request.handler}"
        try:
            start = time.monotonic()
            if request.body is not None:
                resp = await client.post(
                    url,
                    params=request.to_params(),
                    content=request.body.encode("utf-8"),
                    headers={"Content-Type": "text/plain; charset=utf-8"},
                )
            else:
                resp = await client.get(url, params=request.to_params())
            resp.raise_for_status()
            data = _json_object(resp)
        except httpx.HTTPError as e:
            raise TransportError(f"Solr query failed: {e}") from e
        except ValueError as e:
            raise TransportError(f"Solr returned invalid JSON: {e}") from e

        logger.debug("Solr %s took %d ms", request.handler, int((time.monotonic() - start) * 1000))
        return data

    async def update(self, request: UpdateRequest) -> dict[str, Any]:
        """Submit an update request and return Solr's decoded JSON reply."""
        client = self._require_client()
        try:
            resp = await client.post(
                f"/{self._core}/update",
                params=request.to_params(),
                json=request.to_body(),
            )
            resp.raise_for_status()
            data = _json_object(resp)
        except httpx.HTTPError as e:
            raise TransportError(f"Solr update failed: {e}") from e
        except ValueError as e:
            raise TransportError(f"Solr returned invalid JSON: {e}") from e
        return data

    # ── Health ───────────────────────────────────────────────────────────

    async def health_check(self) -> TransportHealth:
        """Ping the core's admin endpoint."""
        if not self._client:
            return TransportHealth(status="unhealthy", message="Client not initialized")

        try:
            start = time.monotonic()
            resp = await self._client.get(f"/{self._core}/admin/ping", params={"wt": "json"})
            latency_ms = int((time.monotonic() - start) * 1000)

            if resp.status_code == 200:
                solr_status = _json_object(resp).get("status", "unknown")
                return TransportHealth(
                    status="healthy" if solr_status == "OK" else "degraded",
                    latency_ms=latency_ms,
                    last_check=datetime.now(UTC).isoformat(),
                    message=f"Core: {self._core}, status: {solr_status}",
                )
            return TransportHealth(
                status="degraded",
                latency_ms=latency_ms,
                last_check=datetime.now(UTC).isoformat(),
                message=f"Solr returned HTTP {resp.status_code}",
            )
        except (httpx.HTTPError, ValueError, TransportError) as e:
            return TransportHealth(status="unhealthy", message=str(e))

    def _require_client(self) -> httpx.AsyncClient:
        if not self._client:
            raise TransportError("Solr transport not initialized.")
        return self._client


def _json_object(resp: httpx.Response) -> dict[str, Any]:
    data = resp.json()
    if not isinstance(data, dict):
        raise TransportError(f"Solr reply is not a JSON object: {type(data).__name__}")
    return data
