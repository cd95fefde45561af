import asyncio
import time

import httpx
import pytest
from fastapi.testclient import TestClient

from conftest import make_feature

from funrec_server import server
from funrec_server.settings import ConfigError
from funrec_server.tools import activities, list_tool_specs


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setenv("GEOAPIFY_API_KEY", "test-key")
    with TestClient(server.app) as test_client:
        yield test_client


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_service_metadata(client):
    data = client.get("/service").json()
    assert data["title"] == "FunRec Places Service"
    assert data["example_queries"][0]["category"] == "Activities"


def test_tool_listing_matches_registry(client):
    tools = client.get("/tools").json()
    assert {t["name"] for t in tools} == {spec.name for spec in list_tool_specs()}
    tool = tools[0]
    assert tool["pricing"] == {"pricePerUse": 0, "currency": "USD"}
    assert set(tool["input_schema"]["required"]) == {"locationName", "latitude", "longitude"}


def test_call_tool_returns_places(client, monkeypatch):
    monkeypatch.setattr(
        activities,
        "fetch_places",
        lambda **kwargs: [make_feature("Pier Park", [-118.2, 33.8], ["leisure.park"], "1 Pier Dr")],
    )
    resp = client.post(
        "/tools/get_fun_activities",
        json={"locationName": "Long Beach", "latitude": 33.77, "longitude": -118.19},
        headers={"x-trace-id": "trace-123", "x-agent-id": "agent-1"},
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["ok"] is True
    assert body["meta"]["trace_id"] == "trace-123"
    assert body["data"]["data"]["places"] == [
        {
            "name": "Pier Park",
            "category": "leisure.park",
            "address": "1 Pier Dr",
            "latitude": 33.8,
            "longitude": -118.2,
        }
    ]
    assert body["data"]["ui"]["children"][0]["markers"][0]["title"] == "Pier Park"


def test_call_tool_upstream_failure_is_not_an_error(client, monkeypatch):
    from funrec_server.adapters import AdapterError

    def failing_fetch(**kwargs):
        raise AdapterError("UPSTREAM_ERROR", "boom", {"status_code": 500})

    monkeypatch.setattr(activities, "fetch_places", failing_fetch)
    resp = client.post(
        "/tools/get_fun_activities",
        json={"locationName": "Carson", "latitude": 33.83, "longitude": -118.28},
    )
    body = resp.json()
    assert body["ok"] is True
    assert body["error"] is None
    assert body["data"]["status"] == "unavailable"
    assert body["data"]["data"]["places"] == []


def test_call_tool_invalid_input(client):
    resp = client.post("/tools/get_fun_activities", json={"locationName": "Carson", "latitude": 120})
    body = resp.json()
    assert body["ok"] is False
    assert body["error"]["code"] == "INVALID_ARGUMENT"


def test_unknown_tool(client):
    resp = client.post("/tools/nope", json={})
    assert resp.status_code == 404


def test_startup_requires_provider_key(monkeypatch):
    monkeypatch.delenv("GEOAPIFY_API_KEY", raising=False)
    monkeypatch.delenv("FUNREC_GEOAPIFY_API_KEY", raising=False)
    with pytest.raises(ConfigError):
        with TestClient(server.app):
            pass


def test_concurrent_calls_do_not_block_each_other(monkeypatch):
    monkeypatch.setenv("GEOAPIFY_API_KEY", "test-key")

    def slow_fetch(**kwargs):
        time.sleep(0.5)
        return [make_feature("Pier Park", [-118.2, 33.8])]

    monkeypatch.setattr(activities, "fetch_places", slow_fetch)
    body = {"locationName": "Long Beach", "latitude": 33.77, "longitude": -118.19}

    async def call_many(n):
        transport = httpx.ASGITransport(app=server.app)
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
            return await asyncio.gather(
                *(client.post("/tools/get_fun_activities", json=body) for _ in range(n))
            )

    start = time.monotonic()
    responses = asyncio.run(call_many(4))
    elapsed = time.monotonic() - start

    assert all(r.json()["data"]["status"] == "ok" for r in responses)
    assert elapsed < 1.5
