"""
PyTest configuration and fixtures.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

import pytest
from fastapi.testclient import TestClient

from result_reaction.api.app import create_app
from result_reaction.infrastructure.data.config import ReactionConfig
from result_reaction.services.results.client import ResultViewClient
from result_reaction.services.results.exceptions import (
    NotFoundError,
    StoreRequestError,
)


class StubResultViewClient(ResultViewClient):
    """In-memory store following the result view contract.

    Snapshots are kept per (container, query) in insertion order together with
    the time they became known. A timestamp bound is inclusive.
    """

    def __init__(self):
        self._results: Dict[Tuple[str, str], List[Tuple[Optional[datetime], Any]]] = {}
        self.calls: List[Tuple[str, ...]] = []
        self.closed = False

    def create_query(self, container_id: str, query_id: str):
        self._results.setdefault((container_id, query_id), [])

    def add(self, container_id: str, query_id: str, snapshot: Any, at: str = None):
        known_at = datetime.fromisoformat(at) if at else None
        self._results.setdefault((container_id, query_id), []).append(
            (known_at, snapshot)
        )

    async def get_current_result(self, container_id: str, query_id: str):
        self.calls.append(("current", container_id, query_id))
        for _, snapshot in self._lookup(container_id, query_id):
            yield snapshot

    async def get_current_result_at_timestamp(
        self, container_id: str, query_id: str, timestamp: str
    ):
        self.calls.append(("at", container_id, query_id, timestamp))
        entries = self._lookup(container_id, query_id)
        try:
            bound = datetime.fromisoformat(timestamp)
        except ValueError:
            raise StoreRequestError(f"Invalid timestamp: {timestamp}", query_id=query_id)
        for known_at, snapshot in entries:
            if known_at is not None and known_at <= bound:
                yield snapshot

    async def aclose(self):
        self.closed = True

    def _lookup(self, container_id: str, query_id: str):
        key = (container_id, query_id)
        if key not in self._results:
            raise NotFoundError(f"Query not found: {query_id}", query_id=query_id)
        return list(self._results[key])


@pytest.fixture
def config():
    return ReactionConfig(query_container_id="tenant-a", request_timeout=5.0)


@pytest.fixture
def store():
    return StubResultViewClient()


@pytest.fixture
def app(config, store):
    return create_app(config, result_view_client=store)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
