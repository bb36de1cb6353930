"""Tests for the HTTP surface and its input validation."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from layout_packer.api import app

client = TestClient(app)

EXAMPLE_ITEMS = [
    {"id": "a", "minWidth": 200, "minHeight": 150, "priority": 10},
    {"id": "b", "minWidth": 200, "minHeight": 150, "priority": 5},
    {"id": "c", "minWidth": 250, "minHeight": 200, "priority": 1},
]


def test_health() -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_pack_example_returns_result_and_metrics() -> None:
    request = {
        "algorithm": "maxrects",
        "items": EXAMPLE_ITEMS,
        "options": {"containerWidth": 400, "containerHeight": 300},
    }

    response = client.post("/pack", json=request)

    assert response.status_code == 200
    data = response.json()
    result = data["result"]

    assert [r["id"] for r in result["packed"]] == ["a", "b"]
    assert result["unpacked"] == ["c"]
    assert result["efficiency"] == pytest.approx(0.5)
    assert result["containerSize"] == {"width": 400, "height": 300}
    assert result["algorithm"] == "maxrects"
    assert set(result["packed"][0]) == {"id", "x", "y", "width", "height"}

    assert data["metrics"]["itemCount"] == 2
    assert data["metrics"]["wastedSpace"] == pytest.approx(60000)


def test_pack_with_density_and_container_size() -> None:
    request = {
        "algorithm": "treemap",
        "items": EXAMPLE_ITEMS,
        "density": "tight",
        "containerWidth": 400,
        "containerHeight": 300,
    }

    response = client.post("/pack", json=request)

    assert response.status_code == 200
    packed = response.json()["result"]["packed"]
    assert len(packed) == 3
    assert all(r["x"] >= 8 and r["y"] >= 8 for r in packed)


def test_stub_algorithm_falls_back() -> None:
    request = {"algorithm": "masonry", "items": EXAMPLE_ITEMS, "containerWidth": 400, "containerHeight": 300}

    response = client.post("/pack", json=request)

    assert response.status_code == 200
    assert response.json()["result"]["algorithm"] == "maxrects"


def test_strict_stub_algorithm_is_501() -> None:
    request = {
        "algorithm": "shelf",
        "strict": True,
        "items": EXAMPLE_ITEMS,
        "containerWidth": 400,
        "containerHeight": 300,
    }

    response = client.post("/pack", json=request)

    assert response.status_code == 501
    assert "not implemented" in response.json()["detail"]


@pytest.mark.parametrize(
    "request_body",
    [
        {"algorithm": "spiral", "items": [], "containerWidth": 10, "containerHeight": 10},
        {"items": EXAMPLE_ITEMS},
        {"items": EXAMPLE_ITEMS, "containerWidth": 10},
        {"items": [{"minWidth": 1, "minHeight": 1}], "containerWidth": 10, "containerHeight": 10},
        {"items": [], "density": "tight", "options": {"containerWidth": 10, "containerHeight": 10}},
    ],
)
def test_invalid_requests_are_422(request_body) -> None:
    response = client.post("/pack", json=request_body)

    assert response.status_code == 422


def test_unknown_density_is_422() -> None:
    request = {"items": [], "density": "cosy", "containerWidth": 10, "containerHeight": 10}

    response = client.post("/pack", json=request)

    assert response.status_code == 422
    assert "Unknown density mode" in response.json()["detail"]


def test_empty_items_and_degenerate_container() -> None:
    request = {"items": [], "options": {"containerWidth": 0, "containerHeight": -5}}

    response = client.post("/pack", json=request)

    assert response.status_code == 200
    result = response.json()["result"]
    assert result["packed"] == []
    assert result["unpacked"] == []
    assert result["efficiency"] == 0


def test_metrics_endpoint() -> None:
    body = {
        "packed": [{"id": "a", "x": 0, "y": 0, "width": 50, "height": 20}],
        "unpacked": [],
        "efficiency": 1.0,
        "containerSize": {"width": 100, "height": 20},
    }

    response = client.post("/metrics", json=body)

    assert response.status_code == 200
    assert response.json() == {
        "efficiency": 0.5,
        "wastedSpace": 1000.0,
        "itemCount": 1,
        "averageItemArea": 1000.0,
    }


def test_catalog_endpoints() -> None:
    algorithms = client.get("/algorithms").json()
    assert {a["name"]: a["implemented"] for a in algorithms} == {
        "maxrects": True,
        "treemap": True,
        "shelf": False,
        "guillotine": False,
        "masonry": False,
    }

    variants = client.get("/variants").json()
    assert len(variants) == 24
    assert variants[0]["name"] == "Shelf Snappy Loose"

    modes = client.get("/density-modes").json()
    assert modes["natural"] == {"padding": 12, "gap": 8, "minItemSize": 100, "jitter": 4}


def test_wildcard_cors_does_not_allow_credentials() -> None:
    response = client.get("/health", headers={"Origin": "https://other.example"})

    assert response.headers["access-control-allow-origin"] == "*"
    assert "access-control-allow-credentials" not in response.headers
