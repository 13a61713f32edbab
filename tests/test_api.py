"""
Tests for calculation and saved-calculation API endpoints.
"""

import pytest
from datetime import datetime, timedelta

from app.services.storage import (
    CalculationStorage,
    SQLStorage,
    StorageError,
    get_storage,
)
from app.main import app

# Client and storage fixtures are provided by conftest.py


# ============================================================================
# CALCULATION API TESTS
# ============================================================================

class TestCalculationAPI:
    """Test calculation endpoints."""

    def test_calculate_emi(self, client):
        """Test EMI endpoint returns schedule and yearly summary."""
        response = client.post(
            "/api/calculate/emi",
            json={
                "loan_amount": 1000000,
                "interest_rate": 8.5,
                "tenure_years": 20,
                "start_date": "2026-01-01",
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert abs(data["monthly_emi"] - 8678.24) < 1
        assert len(data["amortization_schedule"]) == 240
        assert len(data["yearly_summary"]) == 20
        assert data["amortization_schedule"][0]["payment_date"] == "Jan 2026"
        assert data["amortization_schedule"][-1]["remaining_balance"] == 0

    def test_calculate_emi_zero_rate(self, client):
        response = client.post(
            "/api/calculate/emi",
            json={"loan_amount": 240000, "interest_rate": 0, "tenure_years": 2},
        )
        assert response.status_code == 200
        assert response.json()["monthly_emi"] == pytest.approx(10000)

    def test_calculate_emi_invalid(self, client):
        """Test field-level validation errors."""
        response = client.post(
            "/api/calculate/emi",
            json={"loan_amount": -5, "interest_rate": 8.5},
        )
        assert response.status_code == 400
        data = response.json()
        fields = {error["loc"][-1] for error in data["errors"]}
        assert fields == {"loan_amount", "tenure_years"}

    def test_calculate_emi_extreme_rate(self, client):
        response = client.post(
            "/api/calculate/emi",
            json={"loan_amount": 100000, "interest_rate": 1000, "tenure_years": 100},
        )
        assert response.status_code == 200
        assert response.json()["monthly_emi"] == pytest.approx(100000 * 1000 / 100 / 12)

    @pytest.mark.parametrize(
        "path, payload",
        [
            (
                "/api/calculate/compound-interest",
                {"principal": 1000, "rate": 500, "time": 200, "compound_frequency": 365},
            ),
            (
                "/api/calculate/sip",
                {"monthly_amount": 1000, "annual_return": 1000000, "tenure_years": 100},
            ),
            (
                "/api/calculate/rent-vs-buy",
                {
                    "property_price": 7500000,
                    "down_payment": 1500000,
                    "loan_interest_rate": 8.5,
                    "loan_tenure": 20,
                    "monthly_rent": 25000,
                    "property_appreciation": 5,
                    "rent_increase_rate": 5,
                    "investment_return": 1000000,
                    "analysis_years": 100,
                },
            ),
        ],
    )
    def test_overflowing_result_rejected(self, client, path, payload):
        response = client.post(path, json=payload)
        assert response.status_code == 400
        assert "too large" in response.json()["detail"]

    @pytest.mark.parametrize(
        "path, body",
        [
            (
                "/api/calculate/emi",
                '{"loan_amount": Infinity, "interest_rate": 8.5, "tenure_years": 10}',
            ),
            (
                "/api/calculate/sip",
                '{"monthly_amount": 1000, "annual_return": NaN, "tenure_years": 10}',
            ),
            (
                "/api/calculate/gst",
                '{"amount": Infinity, "gst_rate": 18}',
            ),
            (
                "/api/calculate/unit-conversion",
                '{"value": NaN, "from_unit": "meter", "to_unit": "foot", "category": "length"}',
            ),
        ],
    )
    def test_non_finite_numbers_rejected(self, client, path, body):
        # Sent as raw text since the JSON encoder refuses Infinity and NaN
        response = client.post(
            path, content=body, headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 400
        data = response.json()
        assert data["detail"] == "Invalid request data"
        assert data["errors"]

    def test_calculate_sip(self, client):
        response = client.post(
            "/api/calculate/sip",
            json={"monthly_amount": 5000, "annual_return": 12, "tenure_years": 10},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["total_investment"] == 600000
        assert len(data["yearly_breakdown"]) == 10

    def test_calculate_gst(self, client):
        response = client.post(
            "/api/calculate/gst",
            json={"amount": 11800, "gst_rate": 18, "is_inclusive": True},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["base_amount"] == pytest.approx(10000)
        assert data["gst_amount"] == pytest.approx(1800)

    def test_list_gst_rates(self, client):
        response = client.get("/api/calculate/gst/rates")
        assert response.status_code == 200
        assert response.json()["rates"] == [5, 12, 18, 28]

    def test_calculate_compound_interest(self, client):
        response = client.post(
            "/api/calculate/compound-interest",
            json={"principal": 100000, "rate": 10, "time": 10, "compound_frequency": 1},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["final_amount"] == pytest.approx(259374.246, abs=0.01)
        assert len(data["yearly_breakdown"]) == 10

    def test_list_compound_frequencies(self, client):
        response = client.get("/api/calculate/compound-interest/frequencies")
        assert response.status_code == 200
        values = [f["value"] for f in response.json()["frequencies"]]
        assert values == [1, 2, 4, 12, 365]

    def test_calculate_rent_vs_buy(self, client):
        response = client.post(
            "/api/calculate/rent-vs-buy",
            json={
                "property_price": 7500000,
                "down_payment": 1500000,
                "loan_interest_rate": 8.5,
                "loan_tenure": 20,
                "monthly_rent": 25000,
                "property_appreciation": 5,
                "rent_increase_rate": 5,
                "investment_return": 12,
                "analysis_years": 10,
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["recommendation"] in ("buy", "rent")
        assert len(data["yearly_comparison"]) == 10
        assert data["loan_amount"] == 6000000

    def test_calculate_rent_vs_buy_down_payment_too_large(self, client):
        """Engine validation errors are reported as 400."""
        response = client.post(
            "/api/calculate/rent-vs-buy",
            json={
                "property_price": 1000000,
                "down_payment": 2000000,
                "loan_interest_rate": 8.5,
                "loan_tenure": 20,
                "monthly_rent": 25000,
                "analysis_years": 10,
            },
        )
        assert response.status_code == 400
        assert "down_payment" in response.json()["detail"]

    def test_unit_conversion(self, client):
        response = client.post(
            "/api/calculate/unit-conversion",
            json={"category": "temperature", "from_unit": "celsius", "to_unit": "fahrenheit", "value": 100},
        )
        assert response.status_code == 200
        assert response.json()["result"] == pytest.approx(212)

    def test_unit_conversion_unknown_unit(self, client):
        response = client.post(
            "/api/calculate/unit-conversion",
            json={"category": "length", "from_unit": "meter", "to_unit": "cubit", "value": 1},
        )
        assert response.status_code == 400

    def test_list_units(self, client):
        response = client.get("/api/calculate/units")
        assert response.status_code == 200
        ids = {category["id"] for category in response.json()["categories"]}
        assert "length" in ids
        assert "temperature" in ids


# ============================================================================
# SAVED CALCULATION API TESTS
# ============================================================================

class TestSavedCalculationAPI:
    """Test saving and fetching calculations."""

    def test_save_calculation(self, client):
        response = client.post(
            "/api/calculations",
            json={
                "type": "emi",
                "inputs": {"loan_amount": 1000000, "interest_rate": 8.5, "tenure_years": 20},
                "results": {"monthly_emi": 8678.24},
            },
        )
        assert response.status_code == 200
        data = response.json()
        assert data["id"]
        assert data["type"] == "emi"
        assert data["inputs"]["tenure_years"] == 20
        assert data["results"]["monthly_emi"] == 8678.24
        assert "created_at" in data

    def test_get_calculation(self, client):
        created = client.post(
            "/api/calculations",
            json={"type": "gst", "inputs": {"amount": 100}, "results": {"total_amount": 118}},
        ).json()

        response = client.get(f"/api/calculations/{created['id']}")
        assert response.status_code == 200
        assert response.json() == created

    def test_get_calculation_not_found(self, client):
        response = client.get("/api/calculations/does-not-exist")
        assert response.status_code == 404
        assert response.json()["detail"] == "Calculation not found"

    def test_get_calculations_by_type(self, client):
        ids = []
        for amount in (1000, 2000, 3000):
            created = client.post(
                "/api/calculations",
                json={"type": "sip", "inputs": {"monthly_amount": amount}, "results": {}},
            ).json()
            ids.append(created["id"])
        client.post(
            "/api/calculations",
            json={"type": "emi", "inputs": {}, "results": {}},
        )

        response = client.get("/api/calculations/type/sip")
        assert response.status_code == 200
        assert [calc["id"] for calc in response.json()] == ids

    def test_get_calculations_by_type_empty(self, client):
        response = client.get("/api/calculations/type/rent-vs-buy")
        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.parametrize(
        "payload",
        [
            {"type": "mortgage", "inputs": {}, "results": {}},
            {"inputs": {}, "results": {}},
            {"type": "emi", "results": {}},
            {"type": "emi", "inputs": None, "results": {}},
        ],
    )
    def test_save_invalid_calculation(self, client, payload):
        response = client.post("/api/calculations", json=payload)
        assert response.status_code == 400
        data = response.json()
        assert data["detail"] == "Invalid request data"
        assert data["errors"]

    def test_save_non_finite_values_rejected(self, client):
        response = client.post(
            "/api/calculations",
            content='{"type": "sip", "inputs": {"monthly_amount": 1000}, "results": {"future_value": Infinity}}',
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid request data"

    def test_save_storage_failure(self, client):
        """Storage errors surface as 500."""

        class FailingStorage(CalculationStorage):
            def save_calculation(self, calc_type, inputs, results):
                raise StorageError("disk full")

            def get_calculation(self, calculation_id):
                raise StorageError("disk full")

            def get_calculations_by_type(self, calc_type):
                raise StorageError("disk full")

        app.dependency_overrides[get_storage] = lambda: FailingStorage()

        response = client.post(
            "/api/calculations",
            json={"type": "emi", "inputs": {}, "results": {}},
        )
        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to save calculation"

        response = client.get("/api/calculations/some-id")
        assert response.status_code == 500

        response = client.get("/api/calculations/type/emi")
        assert response.status_code == 500


class TestSQLBackedCalculationAPI:
    """Saved calculations round-trip through the SQL backend unchanged."""

    @pytest.fixture
    def sql_client(self, client):
        sql_store = SQLStorage("sqlite:///:memory:")
        app.dependency_overrides[get_storage] = lambda: sql_store
        yield client
        sql_store.close()

    def test_fetched_calculation_matches_saved(self, sql_client):
        created = sql_client.post(
            "/api/calculations",
            json={
                "type": "compound-interest",
                "inputs": {"principal": 1000, "rate": 10, "time": 2},
                "results": {"final_amount": 1210.0},
            },
        )
        assert created.status_code == 200
        created = created.json()

        by_id = sql_client.get(f"/api/calculations/{created['id']}")
        assert by_id.status_code == 200
        assert by_id.json() == created

        by_type = sql_client.get("/api/calculations/type/compound-interest")
        assert by_type.status_code == 200
        assert by_type.json() == [created]

    def test_created_at_is_utc(self, sql_client):
        created = sql_client.post(
            "/api/calculations",
            json={"type": "gst", "inputs": {"amount": 100}, "results": {"total_amount": 118}},
        ).json()
        fetched = sql_client.get(f"/api/calculations/{created['id']}").json()
        created_at = datetime.fromisoformat(fetched["created_at"].replace("Z", "+00:00"))
        assert created_at.utcoffset() == timedelta(0)


# ============================================================================
# HEALTH CHECK TESTS
# ============================================================================

class TestHealthCheck:
    """Test health check endpoint."""

    def test_health_check(self, client):
        """Test health check returns healthy status."""
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "version" in data


class TestLifespan:
    """Test storage lifecycle."""

    def test_storage_created_at_startup(self):
        from fastapi.testclient import TestClient
        from app.services.storage import MemoryStorage

        with TestClient(app) as client:
            assert isinstance(app.state.storage, MemoryStorage)
            created = client.post(
                "/api/calculations",
                json={"type": "unit-converter", "inputs": {"value": 1}, "results": {"result": 100}},
            )
            assert created.status_code == 200
            fetched = client.get(f"/api/calculations/{created.json()['id']}")
            assert fetched.status_code == 200
