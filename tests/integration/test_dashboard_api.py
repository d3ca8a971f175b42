"""API tests for the dashboard endpoint."""

import pytest


@pytest.mark.asyncio
async def test_dashboard_counts_and_errors(backend, client):
    backend.collections.update({
        "/buyers": [
            {"buyer": {"id": 1, "status": "Active"}},
            {"buyer": {"id": 2, "status": "Active"}},
            {"id": 3, "status": "Inactive"},
        ],
        "/sellers": {"sellers": [{"seller": {"id": 1}, "company": {}}]},
        "/categories": [{"id": 1}],
        "/subcategories": [],
        "/products": [{"id": 1}, {"id": 2}],
    })
    backend.on("GET", "/orders", status=500, json={"message": "db down"})

    response = await client.get("/api/v1/dashboard")

    assert response.status_code == 200
    body = response.json()
    assert set(body) == {"counts", "active_buyers", "errors"}
    assert body["counts"] == {
        "buyers": 3,
        "sellers": 1,
        "categories": 1,
        "subcategories": 0,
        "products": 2,
        "orders": 0,
    }
    assert body["active_buyers"] == 2
    assert list(body["errors"]) == ["orders"]
