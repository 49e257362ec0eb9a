import pytest
from fastapi.testclient import TestClient

from dashboard.api import app

client = TestClient(app)


def test_status():
    response = client.get("/status")
    assert response.status_code == 200
    assert response.json()["status"] == "success"

def test_slabs_listing():
    data = client.get("/slabs").json()
    assert set(data) == {"equity", "government_bond", "other"}
    assert data["equity"][0] == {"upper_bound": 50000, "rate": 0.006}
    assert data["government_bond"][-1]["upper_bound"] is None

def test_compute_sell():
    response = client.post("/compute", json={
        "transaction_type": "sell",
        "instrument": "equity",
        "amount": 40000,
        "purchase_cost": 30000,
        "payer_category": "individual",
        "depository_charge": 25,
    })
    assert response.status_code == 200
    data = response.json()
    assert data["capital_gains_tax"] == pytest.approx(500.0)
    assert data["net_amount"] == pytest.approx(39234.94)

def test_compute_buy_from_form_strings():
    response = client.post("/compute", json={
        "transaction_type": "buy",
        "amount": "600000",
        "depository_charge": "25",
    })
    assert response.status_code == 200
    assert response.json()["total_deductions"] == pytest.approx(3025.9)

def test_malformed_amount_counts_as_zero():
    response = client.post("/compute", json={"transaction_type": "buy", "amount": "abc", "depository_charge": 25})
    assert response.status_code == 200
    data = response.json()
    assert data["brokerage"] == 0
    assert data["net_amount"] == pytest.approx(25.0)

def test_invalid_input_is_422():
    response = client.post("/compute", json={"transaction_type": "sell", "amount": 100, "payer_category": "individual"})
    assert response.status_code == 422
    assert "purchase_cost" in response.json()["detail"]

def test_unknown_instrument_is_422():
    response = client.post("/compute", json={"transaction_type": "buy", "instrument": "crypto", "amount": 100})
    assert response.status_code == 422
