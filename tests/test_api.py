"""
Tests for the HTTP API
"""

import pytest
import sys
from pathlib import Path

# Add project root (main.py) and src to path
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from fastapi.testclient import TestClient

from main import app


@pytest.fixture(scope="module")
def client():
    return TestClient(app)


@pytest.fixture
def split_payload():
    return {
        "items": [
            {"name": "Pizza", "price": 15.0},
            {"name": "Beer", "price": 2.5, "quantity": 2},
        ],
        "payees": [{"id": "a", "name": "Ann"}, {"id": "b", "name": "Ben"}],
        "assignments": [
            {"item_index": 0, "payee_ids": ["a", "b"], "is_split": True},
            {"item_index": 1, "payee_ids": ["b"]},
        ],
        "tip_percentage": 10,
    }


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["health"] == "/health"


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["service"] == "receipt-split-parser"


def test_parse_receipt(client):
    response = client.post(
        "/api/v1/receipts/parse",
        json={"text": "Burger $12.99\nFries $4.50\nSubtotal $17.49"},
    )
    assert response.status_code == 200

    receipt = response.json()["receipt"]
    assert [i["name"] for i in receipt["items"]] == ["Burger", "Fries"]
    assert receipt["subtotal"] == pytest.approx(17.49)
    assert receipt["layout"] == "inline"
    assert receipt["receipt_type"] == "restaurant"
    assert receipt["is_placeholder"] is False


def test_parse_empty_text(client):
    response = client.post("/api/v1/receipts/parse", json={})
    assert response.status_code == 200

    receipt = response.json()["receipt"]
    assert receipt["is_placeholder"] is True
    assert receipt["total"] == pytest.approx(23.38)


def test_split_bill(client, split_payload):
    response = client.post("/api/v1/bills/split", json=split_payload)
    assert response.status_code == 200

    summary = response.json()["summary"]
    assert summary["subtotal"] == pytest.approx(20.0)
    assert summary["tip"] == pytest.approx(2.0)
    assert summary["currency"] == "ZAR"

    ann, ben = summary["payees"]
    assert ann["total"] == pytest.approx(8.5)
    assert ben["total"] == pytest.approx(13.5)


def test_split_custom_tip_and_currency(client, split_payload):
    split_payload["custom_tip"] = 5
    split_payload["currency"] = "usd"

    summary = client.post("/api/v1/bills/split", json=split_payload).json()["summary"]
    assert summary["tip"] == pytest.approx(5.0)
    assert summary["currency"] == "USD"


def test_split_unassigned_item(client, split_payload):
    split_payload["assignments"].pop()
    response = client.post("/api/v1/bills/split", json=split_payload)

    assert response.status_code == 400
    assert "Beer" in response.json()["detail"]


def test_split_unknown_currency(client, split_payload):
    split_payload["currency"] = "XYZ"
    response = client.post("/api/v1/bills/split", json=split_payload)

    assert response.status_code == 400
    assert "XYZ" in response.json()["detail"]


def test_split_rejects_negative_tip(client, split_payload):
    split_payload["tip_percentage"] = -5
    response = client.post("/api/v1/bills/split", json=split_payload)
    assert response.status_code == 422


def test_split_options(client):
    response = client.get("/api/v1/bills/options")
    assert response.status_code == 200

    data = response.json()
    assert data["default_currency"] == "ZAR"
    assert data["tip_options"] == [10, 15, 20, 25]
    assert data["default_tip_percentage"] == 10


def test_list_currencies(client):
    response = client.get("/api/v1/currencies")
    assert response.status_code == 200

    codes = [c["code"] for c in response.json()["currencies"]]
    assert codes[0] == "ZAR"
    assert len(codes) == 16


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
