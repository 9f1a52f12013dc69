"""Integration tests for API endpoints"""

import pytest
from fastapi.testclient import TestClient

pytestmark = pytest.mark.integration


@pytest.fixture
def loan_payload():
    """Request body for a medium-risk 30-year mortgage (score 35)"""
    return {
        "name": "Home Mortgage",
        "amount": 250000,
        "interest_rate": 4.5,
        "term": 360,
        "start_date": "2023-01-15",
        "end_date": "2053-01-15",
        "status": "active",
        "borrower_name": "John Smith",
        "borrower_email": "john.smith@example.com",
        "credit_score": 780,
        "collateral": 300000,
    }


@pytest.fixture
def created_loan(client: TestClient, loan_payload) -> dict:
    response = client.post("/v1/loans", json=loan_payload)
    assert response.status_code == 201
    return response.json()


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient, created_loan):
    """Test Prometheus metrics endpoint"""
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "loan_portfolio_loans_created_total" in response.text


def test_request_id_header(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "abc-123"})
    assert response.headers["X-Request-ID"] == "abc-123"
    assert client.get("/health").headers["X-Request-ID"]


def test_create_loan(created_loan):
    """Test POST /v1/loans computes risk on creation"""
    assert created_loan["id"]
    assert created_loan["risk_score"] == 35
    assert created_loan["risk_level"] == "medium"
    assert created_loan["status"] == "active"
    assert created_loan["start_date"] == "2023-01-15"


@pytest.mark.parametrize(
    "field,value",
    [
        ("amount", 0),
        ("amount", -5),
        ("interest_rate", 101),
        ("interest_rate", -1),
        ("term", 0),
        ("status", "closed"),
        ("borrower_email", "not-an-email"),
        ("credit_score", 250),
        ("credit_score", 900),
        ("collateral", -1),
        ("name", ""),
        ("term", 1201),
        ("term", 10**7),
        ("amount", 10**13),
        ("borrower_email", "john@"),
    ],
)
def test_create_loan_validation(client: TestClient, loan_payload, field, value):
    response = client.post("/v1/loans", json={**loan_payload, field: value})
    assert response.status_code == 422


def test_get_loan(client: TestClient, created_loan):
    response = client.get(f"/v1/loans/{created_loan['id']}")

    assert response.status_code == 200
    assert response.json()["name"] == "Home Mortgage"


def test_get_loan_not_found(client: TestClient):
    response = client.get("/v1/loans/00000000-0000-0000-0000-000000000000")
    assert response.status_code == 404


def test_list_loans(client: TestClient, created_loan, loan_payload):
    client.post("/v1/loans", json={**loan_payload, "name": "Pending Loan", "status": "pending"})

    all_loans = client.get("/v1/loans").json()["loans"]
    pending = client.get("/v1/loans", params={"status": "pending"}).json()["loans"]

    assert len(all_loans) == 2
    assert [loan["name"] for loan in pending] == ["Pending Loan"]
    assert client.get("/v1/loans", params={"status": "closed"}).status_code == 422


def test_loan_payments(client: TestClient, created_loan):
    """Test GET /v1/loans/{loan_id}/payments returns the generated schedule"""
    response = client.get(f"/v1/loans/{created_loan['id']}/payments")

    assert response.status_code == 200
    payments = response.json()["payments"]
    assert len(payments) == 360
    assert payments[0]["payment_number"] == 1
    assert payments[0]["amount"] == pytest.approx(1266.71)
    assert payments[0]["due_date"] == "2023-01-15"
    assert payments[1]["due_date"] == "2023-02-15"
    assert [p["status"] for p in payments[:7]] == ["paid"] * 5 + ["late", "pending"]
    assert payments[0]["paid_date"] is not None
    assert payments[6]["paid_date"] is None


def test_loan_payments_not_found(client: TestClient):
    assert client.get("/v1/loans/missing/payments").status_code == 404


def test_update_loan_rescores_risk(client: TestClient, created_loan):
    """Test PATCH /v1/loans/{loan_id} with a risk-affecting field"""
    response = client.patch(f"/v1/loans/{created_loan['id']}", json={"credit_score": 580})

    assert response.status_code == 200
    data = response.json()
    assert data["risk_score"] == 75
    assert data["risk_level"] == "high"
    assert data["amount"] == 250000


def test_update_loan_regenerates_payments(client: TestClient, created_loan):
    loan_id = created_loan["id"]
    old_ids = {p["id"] for p in client.get(f"/v1/loans/{loan_id}/payments").json()["payments"]}

    response = client.patch(f"/v1/loans/{loan_id}", json={"amount": 100000, "term": 120})
    assert response.status_code == 200

    payments = client.get(f"/v1/loans/{loan_id}/payments").json()["payments"]
    assert len(payments) == 120
    assert old_ids.isdisjoint(p["id"] for p in payments)
    assert payments[0]["amount"] == pytest.approx(1036.38, abs=0.01)


def test_update_loan_null_required_field_is_ignored(client: TestClient, created_loan):
    response = client.patch(f"/v1/loans/{created_loan['id']}", json={"amount": None, "collateral": None})

    assert response.status_code == 200
    data = response.json()
    assert data["amount"] == 250000
    assert data["collateral"] is None
    # No collateral: LTV counts as 100% (+15) instead of 83% (0)
    assert data["risk_score"] == 50


def test_update_loan_not_found(client: TestClient):
    response = client.patch("/v1/loans/missing", json={"name": "x"})
    assert response.status_code == 404


def test_delete_loan(client: TestClient, created_loan):
    loan_id = created_loan["id"]

    response = client.delete(f"/v1/loans/{loan_id}")

    assert response.status_code == 204
    assert client.get(f"/v1/loans/{loan_id}").status_code == 404
    assert client.get(f"/v1/loans/{loan_id}/payments").status_code == 404
    assert client.delete(f"/v1/loans/{loan_id}").status_code == 404


def test_update_payment_status(client: TestClient, created_loan):
    """Test PATCH /v1/payments/{payment_id}"""
    payments = client.get(f"/v1/loans/{created_loan['id']}/payments").json()["payments"]
    pending = payments[10]

    response = client.patch(f"/v1/payments/{pending['id']}", json={"status": "paid"})
    assert response.status_code == 200
    assert response.json()["status"] == "paid"
    assert response.json()["paid_date"] is not None

    response = client.patch(f"/v1/payments/{pending['id']}", json={"status": "missed"})
    assert response.json()["status"] == "missed"
    assert response.json()["paid_date"] is None


def test_update_payment_status_invalid(client: TestClient, created_loan):
    payment = client.get(f"/v1/loans/{created_loan['id']}/payments").json()["payments"][0]

    assert client.patch(f"/v1/payments/{payment['id']}", json={"status": "refunded"}).status_code == 422
    assert client.patch("/v1/payments/missing", json={"status": "paid"}).status_code == 404


def test_analytics(client: TestClient, created_loan, loan_payload):
    client.post(
        "/v1/loans",
        json={**loan_payload, "name": "Startup", "amount": 75000, "interest_rate": 9.5, "term": 84,
              "credit_score": 650, "collateral": 25000, "status": "pending"},
    )

    response = client.get("/v1/analytics")

    assert response.status_code == 200
    data = response.json()
    assert data["total_loans"] == 2
    assert data["total_amount"] == 325000
    assert data["average_interest_rate"] == pytest.approx(7.0)
    assert data["status_distribution"] == {"pending": 1, "active": 1, "paid": 0, "defaulted": 0}
    assert data["risk_distribution"] == {"low": 0, "medium": 1, "high": 1, "very-high": 0}
    assert data["amount_by_risk"]["high"] == 75000
    assert len(data["monthly_payments"]) == 12
    assert data["payment_status_distribution"]["paid"] == 5
    assert data["payment_status_distribution"]["late"] == 1
    assert sum(data["payment_status_distribution"].values()) == 360 + 84


def test_repayment_calculator(client: TestClient):
    response = client.post(
        "/v1/calculators/repayment",
        json={"principal": 250000, "annual_rate_percent": 4.5, "term_months": 360},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["monthly_payment"] == pytest.approx(1266.71, abs=0.01)
    assert data["total_cost"] == pytest.approx(250000 + data["total_interest"])
    assert len(data["schedule"]) == 360
    assert len(data["yearly"]) == 30
    assert data["schedule"][-1]["remaining_balance"] == pytest.approx(0, abs=1e-4)


def test_repayment_calculator_empty_form(client: TestClient):
    """Half-filled forms get zeros, not errors"""
    response = client.post(
        "/v1/calculators/repayment",
        json={"principal": 0, "annual_rate_percent": 5, "term_months": 0},
    )

    assert response.status_code == 200
    assert response.json()["monthly_payment"] == 0
    assert response.json()["schedule"] == []


def test_affordability_calculator(client: TestClient):
    response = client.post(
        "/v1/calculators/affordability",
        json={
            "monthly_income": 5000,
            "monthly_expenses": 2000,
            "annual_rate_percent": 5,
            "term_months": 360,
            "down_payment": 20000,
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["monthly_payment"] == pytest.approx(1080)
    assert data["dti"] == pytest.approx(21.6)
    assert data["dti_rating"] == "good"
    assert data["total_purchase"] == pytest.approx(data["affordable_amount"] + 20000)
    assert [p["rate"] for p in data["rate_sensitivity"]] == [3, 4, 5, 6, 7]


def test_comparison_calculator(client: TestClient):
    response = client.post(
        "/v1/calculators/comparison",
        json={"principal": 250000, "rates": [5.0, 4.5, 5.5], "terms": [360, 180, 240]},
    )

    assert response.status_code == 200
    data = response.json()
    assert [r["rate"] for r in data["rate_comparison"]] == [5.0, 4.5, 5.5]
    assert [t["term"] for t in data["term_comparison"]] == [360, 180, 240]
    # Rates compared over the first term, terms at the first rate
    assert data["rate_comparison"][0]["monthly_payment"] == pytest.approx(data["term_comparison"][0]["monthly_payment"])


def test_comparison_calculator_validation(client: TestClient):
    assert client.post(
        "/v1/calculators/comparison",
        json={"principal": 250000, "rates": [], "terms": [360]},
    ).status_code == 422
    assert client.post(
        "/v1/calculators/comparison",
        json={"principal": 250000, "rates": [5], "terms": [0]},
    ).status_code == 422


def test_create_loan_with_tiny_rate(client: TestClient, loan_payload):
    """A rate too small to move 1 + r still prices as straight-line repayment"""
    response = client.post(
        "/v1/loans",
        json={**loan_payload, "amount": 12000, "interest_rate": 1e-15, "term": 12},
    )

    assert response.status_code == 201
    payments = client.get(f"/v1/loans/{response.json()['id']}/payments").json()["payments"]
    assert len(payments) == 12
    assert all(p["amount"] == pytest.approx(1000) for p in payments)
    assert all(p["interest"] == 0 for p in payments)


def test_update_loan_rejects_invalid_email_and_term(client: TestClient, created_loan):
    url = f"/v1/loans/{created_loan['id']}"

    assert client.patch(url, json={"borrower_email": "nobody"}).status_code == 422
    assert client.patch(url, json={"term": 5000}).status_code == 422
    assert client.patch(url, json={"borrower_email": "new.owner@example.com"}).json()["borrower_email"] == (
        "new.owner@example.com"
    )


@pytest.mark.parametrize(
    "path,payload",
    [
        ("/v1/calculators/repayment", {"principal": 1000, "annual_rate_percent": 100, "term_months": 10000}),
        (
            "/v1/calculators/affordability",
            {"monthly_income": 5000, "annual_rate_percent": 100, "term_months": 10000},
        ),
        ("/v1/calculators/comparison", {"principal": 1000, "rates": [100], "terms": [10000]}),
    ],
)
def test_calculators_reject_terms_beyond_limit(client: TestClient, path, payload):
    assert client.post(path, json=payload).status_code == 422


def test_calculators_handle_extreme_valid_inputs(client: TestClient):
    """Longest term at the highest rate, and a near-zero rate, stay finite"""
    response = client.post(
        "/v1/calculators/repayment",
        json={"principal": 1000, "annual_rate_percent": 100, "term_months": 1200},
    )
    assert response.status_code == 200
    assert response.json()["monthly_payment"] == pytest.approx(1000 * 100 / 100 / 12)

    response = client.post(
        "/v1/calculators/affordability",
        json={"monthly_income": 5000, "monthly_expenses": 2000, "annual_rate_percent": 1e-15, "term_months": 12},
    )
    assert response.status_code == 200
    assert response.json()["affordable_amount"] == pytest.approx(1080 * 12)

    response = client.post(
        "/v1/calculators/comparison",
        json={"principal": 1200, "rates": [1e-15, 100], "terms": [1200, 12]},
    )
    assert response.status_code == 200
    assert response.json()["term_comparison"][1]["monthly_payment"] == pytest.approx(100)
