"""
Tests for the result view routes.
"""

import pytest

from result_reaction.services.results.exceptions import UpstreamError

CONTAINER = "tenant-a"


class TestCurrentResult:
    """Tests for GET /{query_id}."""

    def test_returns_data_of_last_snapshot(self, client, store):
        store.add(CONTAINER, "orders", {"data": {"count": 1}})
        store.add(CONTAINER, "orders", {"data": {"count": 2}})
        store.add(CONTAINER, "orders", {"data": {"count": 3}})

        response = client.get("/orders")

        assert response.status_code == 200
        assert response.json() == {"count": 3}

    def test_round_trip_is_unchanged(self, client, store):
        store.add(CONTAINER, "q1", {"data": {"x": 1}})

        response = client.get("/q1")

        assert response.status_code == 200
        assert response.json() == {"x": 1}

    def test_last_snapshot_without_data_is_skipped(self, client, store):
        store.add(CONTAINER, "orders", {"header": {"sequence": 10}})
        store.add(CONTAINER, "orders", {"data": {"count": 1}})
        store.add(CONTAINER, "orders", {"metadata": "trailing"})

        response = client.get("/orders")

        assert response.status_code == 200
        assert response.json() == {"count": 1}

    def test_empty_sequence_is_an_explicit_error(self, client, store):
        store.create_query(CONTAINER, "empty")

        response = client.get("/empty")

        assert response.status_code == 404
        assert "No result available" in response.json()["detail"]

    def test_sequence_without_any_data_is_an_explicit_error(self, client, store):
        store.add(CONTAINER, "headers-only", {"header": {}})

        response = client.get("/headers-only")

        assert response.status_code == 404
        assert "headers-only" in response.json()["detail"]

    def test_unknown_query_is_not_found(self, client):
        response = client.get("/missing")

        assert response.status_code == 404
        assert response.json()["detail"] == "Query not found: missing"

    def test_null_data_is_returned_as_null(self, client, store):
        store.add(CONTAINER, "nullable", {"data": None})

        response = client.get("/nullable")

        assert response.status_code == 200
        assert response.json() is None

    def test_reads_from_configured_container(self, client, store):
        store.add("other", "orders", {"data": "wrong container"})
        store.add(CONTAINER, "orders", {"data": "right container"})

        response = client.get("/orders")

        assert response.json() == "right container"
        assert store.calls == [("current", CONTAINER, "orders")]


class TestAllResults:
    """Tests for GET /{query_id}/all."""

    def test_returns_all_data_in_order(self, client, store):
        for i in range(4):
            store.add(CONTAINER, "orders", {"data": {"n": i}})

        response = client.get("/orders/all")

        assert response.status_code == 200
        assert response.json() == [{"n": 0}, {"n": 1}, {"n": 2}, {"n": 3}]

    def test_snapshots_without_data_are_omitted(self, client, store):
        snapshots = [
            {"header": {"sequence": 1}},
            {"data": "a"},
            "not-an-object",
            {"data": "b"},
            {"other": "c"},
        ]
        for snapshot in snapshots:
            store.add(CONTAINER, "mixed", snapshot)

        response = client.get("/mixed/all")

        assert response.status_code == 200
        body = response.json()
        assert body == ["a", "b"]
        assert len(body) <= len(snapshots)

    def test_empty_sequence_returns_empty_array(self, client, store):
        store.create_query(CONTAINER, "empty")

        response = client.get("/empty/all")

        assert response.status_code == 200
        assert response.json() == []

    def test_unknown_query_is_not_found(self, client):
        response = client.get("/missing/all")

        assert response.status_code == 404


class TestResultAtTimestamp:
    """Tests for GET /{query_id}/{ts}."""

    @pytest.fixture
    def history(self, store):
        store.add(CONTAINER, "prices", {"data": {"v": 1}}, at="2023-04-20T00:00:00")
        store.add(CONTAINER, "prices", {"data": {"v": 2}}, at="2023-04-21T00:00:00")
        store.add(CONTAINER, "prices", {"data": {"v": 3}}, at="2023-04-22T00:00:00")
        return store

    def test_excludes_snapshots_after_timestamp(self, client, history):
        response = client.get("/prices/2023-04-21T00:00:00")

        assert response.status_code == 200
        assert response.json() == [{"v": 1}, {"v": 2}]

    def test_timestamp_before_history_returns_empty_array(self, client, history):
        response = client.get("/prices/2023-01-01T00:00:00")

        assert response.status_code == 200
        assert response.json() == []

    def test_timestamp_is_forwarded_verbatim(self, client, history):
        client.get("/prices/2023-04-21T12:30:00")

        assert history.calls[-1] == (
            "at",
            CONTAINER,
            "prices",
            "2023-04-21T12:30:00",
        )

    def test_malformed_timestamp_surfaces_store_error(self, client, history):
        response = client.get("/prices/not-a-timestamp")

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid timestamp: not-a-timestamp"
        assert history.calls[-1][-1] == "not-a-timestamp"

    def test_all_is_not_treated_as_timestamp(self, client, history):
        response = client.get("/prices/all")

        assert response.status_code == 200
        assert len(response.json()) == 3
        assert history.calls[-1][0] == "current"


def test_upstream_failure_is_bad_gateway(client, store, monkeypatch):
    async def failing(container_id, query_id):
        raise UpstreamError("View service returned 503: unavailable")
        yield  # pragma: no cover

    monkeypatch.setattr(store, "get_current_result", failing)

    response = client.get("/orders/all")

    assert response.status_code == 502
    assert "503" in response.json()["detail"]


def test_unexpected_failure_is_server_error(client, store, monkeypatch):
    async def broken(container_id, query_id):
        raise RuntimeError("boom")
        yield  # pragma: no cover

    monkeypatch.setattr(store, "get_current_result", broken)

    response = client.get("/orders")

    assert response.status_code == 500
    assert response.json()["detail"] == "Server error: boom"
