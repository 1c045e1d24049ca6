from __future__ import annotations

import asyncio
import logging
from typing import Any, AsyncIterator, List, Optional

from result_reaction.services.results.client import ResultViewClient
from result_reaction.services.results.dto import LatestResult
from result_reaction.services.results.exceptions import UpstreamTimeoutError
from result_reaction.services.results.mappers import extract_data

logger = logging.getLogger(__name__)


class ResultViewQuery:
    """Read-only query layer for result views.

    Drains the client's sequences under a request deadline and returns plain
    ``data`` values or DTOs. One instance is built per request.
    """

    def __init__(
        self,
        client: ResultViewClient,
        container_id: str,
        deadline: Optional[float] = None,
    ):
        self.client = client
        self.container_id = container_id
        self.deadline = deadline

    async def get_latest(self, query_id: str) -> Optional[LatestResult]:
        values = await self.get_all(query_id)
        if not values:
            return None
        return LatestResult(query_id=query_id, data=values[-1])

    async def get_all(self, query_id: str) -> List[Any]:
        snapshots = self.client.get_current_result(self.container_id, query_id)
        return await self._collect(query_id, snapshots)

    async def get_at_timestamp(self, query_id: str, timestamp: str) -> List[Any]:
        snapshots = self.client.get_current_result_at_timestamp(
            self.container_id, query_id, timestamp
        )
        return await self._collect(query_id, snapshots)

    async def _collect(self, query_id: str, snapshots: AsyncIterator[Any]) -> List[Any]:
        try:
            return await asyncio.wait_for(self._drain(snapshots), timeout=self.deadline)
        except asyncio.TimeoutError as e:
            logger.error(
                f"Deadline of {self.deadline}s exceeded reading results for {query_id}"
            )
            raise UpstreamTimeoutError(
                f"Timed out reading results for query {query_id}", query_id=query_id
            ) from e

    @staticmethod
    async def _drain(snapshots: AsyncIterator[Any]) -> List[Any]:
        values = []
        async for snapshot in snapshots:
            found, value = extract_data(snapshot)
            if found:
                values.append(value)
        return values
