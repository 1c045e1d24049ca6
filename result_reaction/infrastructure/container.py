"""
Dependency injection container.

This module provides a container holding the process configuration and the
result view client, and building per-request query objects from them.
"""

import logging
from typing import Optional

from result_reaction.infrastructure.data.config import ReactionConfig
from result_reaction.services.results.client import (
    HttpResultViewClient,
    ResultViewClient,
)
from result_reaction.services.results.query import ResultViewQuery

logger = logging.getLogger(__name__)


class Container:
    """
    Dependency injection container.

    A client passed in at construction belongs to the caller. A client the
    container creates itself is closed by ``close``.
    """

    def __init__(
        self,
        config: ReactionConfig,
        result_view_client: Optional[ResultViewClient] = None,
    ):
        """
        Initialize the container.

        Args:
            config: Process configuration
            result_view_client: Client to use instead of the HTTP client
        """
        self.config = config
        self._result_view_client = result_view_client
        self._owns_client = False

    def get_result_view_client(self) -> ResultViewClient:
        """
        Get the result view client, creating the HTTP client on first use.

        Returns:
            Result view client instance
        """
        if self._result_view_client is None:
            self._result_view_client = HttpResultViewClient(
                base_url_template=self.config.view_service_url,
                timeout=self.config.request_timeout,
            )
            self._owns_client = True
            logger.debug(
                f"Created HTTP result view client for {self.config.view_service_url}"
            )
        return self._result_view_client

    def get_result_view_query(self) -> ResultViewQuery:
        """
        Get a query object bound to the configured container.

        Returns:
            New ResultViewQuery instance
        """
        return ResultViewQuery(
            self.get_result_view_client(),
            container_id=self.config.query_container_id,
            deadline=self.config.request_timeout,
        )

    async def close(self):
        """Close the client if the container created it."""
        if self._owns_client and self._result_view_client is not None:
            await self._result_view_client.aclose()
            self._result_view_client = None
            self._owns_client = False
