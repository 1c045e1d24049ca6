"""
Result view clients.

This module defines the capability used to read materialized query results
from the external store, and an implementation that talks to the store's view
service over HTTP.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, AsyncIterator, Optional
from urllib.parse import quote

import httpx

from result_reaction.services.results.dto import ResultSnapshot
from result_reaction.services.results.exceptions import (
    NotFoundError,
    StoreRequestError,
    UpstreamError,
    UpstreamTimeoutError,
)

logger = logging.getLogger(__name__)

DEFAULT_VIEW_SERVICE_URL = "http://{container_id}-view-svc"
NDJSON_CONTENT_TYPE = "application/x-ndjson"


class ResultViewClient(ABC):
    """
    Abstract read access to a query's result history.

    Both methods return lazy, single-use sequences of snapshots ordered oldest
    to newest. Errors surface when the sequence is first iterated.
    """

    @abstractmethod
    def get_current_result(
        self, container_id: str, query_id: str
    ) -> AsyncIterator[ResultSnapshot]:
        """
        Stream the current result of a query.

        Args:
            container_id: Container the query belongs to
            query_id: Query identifier

        Raises:
            NotFoundError: If the store does not know the query or container
        """

    @abstractmethod
    def get_current_result_at_timestamp(
        self, container_id: str, query_id: str, timestamp: str
    ) -> AsyncIterator[ResultSnapshot]:
        """
        Stream the result of a query as known at ``timestamp``.

        The timestamp is forwarded verbatim; the store decides whether it is
        valid.
        """

    async def aclose(self) -> None:
        """Release any resources held by the client."""


class HttpResultViewClient(ResultViewClient):
    """Result view client backed by the store's HTTP view service."""

    def __init__(
        self,
        base_url_template: str = DEFAULT_VIEW_SERVICE_URL,
        timeout: Optional[float] = 30.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url_template: URL of the view service, ``{container_id}`` is
                substituted per call
            timeout: Transport timeout in seconds, ``None`` disables it
            http_client: Pre-built client to use instead of creating one; it is
                not closed by ``aclose``
        """
        self.base_url_template = base_url_template
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))

    def get_current_result(
        self, container_id: str, query_id: str
    ) -> AsyncIterator[ResultSnapshot]:
        return self._stream_snapshots(container_id, query_id)

    def get_current_result_at_timestamp(
        self, container_id: str, query_id: str, timestamp: str
    ) -> AsyncIterator[ResultSnapshot]:
        return self._stream_snapshots(container_id, query_id, timestamp)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    def build_url(self, container_id: str, *segments: str) -> str:
        """Build the view service URL for a container and path segments."""
        base = self.base_url_template.format(container_id=quote(container_id, safe=""))
        path = "/".join(quote(segment, safe=":") for segment in segments)
        return f"{base.rstrip('/')}/{path}"

    async def _stream_snapshots(
        self, container_id: str, query_id: str, timestamp: Optional[str] = None
    ) -> AsyncIterator[ResultSnapshot]:
        segments = [query_id] if timestamp is None else [query_id, timestamp]
        url = self.build_url(container_id, *segments)
        logger.debug(f"Requesting result view: {url}")

        try:
            async with self._http.stream("GET", url) as response:
                if response.status_code >= 400:
                    await response.aread()
                    self._raise_for_status(response, query_id)

                content_type = response.headers.get("content-type", "")
                if NDJSON_CONTENT_TYPE in content_type:
                    async for line in response.aiter_lines():
                        if line.strip():
                            yield self._decode(line, query_id)
                    return

                body = await response.aread()
                if not body.strip():
                    return
                items = self._decode(body, query_id)
                if not isinstance(items, list):
                    raise UpstreamError(
                        f"Expected a JSON array from the view service for query {query_id}",
                        query_id=query_id,
                    )
                for item in items:
                    yield item
        except httpx.TimeoutException as e:
            logger.error(f"Timed out reading result view for {query_id}: {str(e)}")
            raise UpstreamTimeoutError(
                f"Timed out reading results for query {query_id}", query_id=query_id
            ) from e
        except httpx.HTTPError as e:
            logger.error(f"Error reading result view for {query_id}: {str(e)}")
            raise UpstreamError(
                f"Error communicating with the view service: {str(e)}",
                query_id=query_id,
            ) from e

    @staticmethod
    def _raise_for_status(response: httpx.Response, query_id: str) -> None:
        status = response.status_code
        message = response.text.strip()[:500]
        if status == 404:
            raise NotFoundError(f"Query not found: {query_id}", query_id=query_id)
        if status < 500:
            raise StoreRequestError(
                message or f"View service rejected the request ({status})",
                query_id=query_id,
            )
        raise UpstreamError(
            f"View service returned {status}: {message}", query_id=query_id
        )

    @staticmethod
    def _decode(raw: Any, query_id: str) -> Any:
        try:
            return json.loads(raw)
        except ValueError as e:
            raise UpstreamError(
                f"Invalid JSON from the view service for query {query_id}",
                query_id=query_id,
            ) from e
