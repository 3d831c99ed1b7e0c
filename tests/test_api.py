"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from spendtrack.api import create_app
from spendtrack.database import make_engine
from spendtrack.services import AnalyticsService, TransactionService
from spendtrack.storage import MemoryStorage, SqlStorage
from tests.conftest import SAMPLE, fixed_clock


class ExplodingStorage(MemoryStorage):
    """Memory store whose reads fail like a broken database."""

    def list_transactions(self, query):
        raise RuntimeError("connection refused by db-host-01")

    def total_between(self, start, end, user_id=None):
        raise RuntimeError("connection refused by db-host-01")


def client_for(storage) -> TestClient:
    app = create_app(
        TransactionService(storage, clock=fixed_clock),
        AnalyticsService(storage, clock=fixed_clock),
    )
    return TestClient(app)


@pytest.fixture
def client():
    storage = MemoryStorage()
    storage.insert_transactions(SAMPLE)
    return client_for(storage)


def rent_id(client) -> int:
    body = client.get("/api/transactions", params={"search": "rent"}).json()
    return body["transactions"][0]["id"]


class TestListTransactions:
    def test_response_shape(self, client):
        response = client.get("/api/transactions", params={"limit": 3})

        assert response.status_code == 200
        body = response.json()
        assert body["pagination"] == {"total": 8, "page": 1, "limit": 3, "pages": 3}
        assert body["filteredTotal"] == 1007.5
        first = body["transactions"][0]
        assert set(first) == {"id", "price", "items", "dateTime", "dateOnly", "category", "userId"}
        assert first["items"] == "Coffee beans"
        assert first["dateOnly"] == "2024-11-20"
        assert first["dateTime"].startswith("2024-11-20T17:45")

    def test_query_parameters(self, client):
        response = client.get(
            "/api/transactions",
            params={"category": "Food", "sortBy": "price:desc", "dateFilter": "this_month"},
        )

        body = response.json()
        assert [t["price"] for t in body["transactions"]] == [12.5, 7.5]
        assert body["filteredTotal"] == 20.0

    def test_page_past_the_end(self, client):
        body = client.get("/api/transactions", params={"page": 5, "limit": 3}).json()

        assert body["transactions"] == []
        assert body["pagination"]["pages"] == 3

    def test_huge_page_on_sqlite(self):
        storage = SqlStorage(make_engine("sqlite://"))
        storage.insert_transactions(SAMPLE)

        response = client_for(storage).get(
            "/api/transactions", params={"page": 10**18, "limit": 10}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["transactions"] == []
        assert body["pagination"]["total"] == 8
        assert body["filteredTotal"] == 1007.5

    @pytest.mark.parametrize(
        "params, field",
        [
            ({"page": "abc"}, "page"),
            ({"limit": "ten"}, "limit"),
            ({"limit": 0}, "limit"),
            ({"page": -1}, "page"),
            ({"sortBy": "items:asc"}, "sortBy"),
            ({"category": "Books"}, "category"),
        ],
    )
    def test_invalid_parameters(self, client, params, field):
        response = client.get("/api/transactions", params=params)

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Validation error"
        assert field in {err["field"] for err in body["errors"]}

    def test_storage_failure_hides_details(self):
        response = client_for(ExplodingStorage()).get("/api/transactions")

        assert response.status_code == 500
        assert response.json() == {"message": "Failed to fetch transactions"}
        assert "db-host-01" not in response.text


class TestSingleTransaction:
    def test_get(self, client):
        txn_id = rent_id(client)
        response = client.get(f"/api/transactions/{txn_id}")

        assert response.status_code == 200
        assert response.json()["items"] == "Monthly Rent"

    def test_get_missing(self, client):
        response = client.get("/api/transactions/9999")

        assert response.status_code == 404
        assert response.json() == {"message": "Transaction not found"}

    def test_get_non_numeric_id(self, client):
        response = client.get("/api/transactions/abc")

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "transaction_id"

    def test_update(self, client):
        txn_id = rent_id(client)
        payload = {
            "price": 825.0,
            "items": "Monthly Rent (new lease)",
            "dateTime": "2024-11-02T09:00:00",
            "dateOnly": "2024-11-02",
            "category": "Rent",
        }

        response = client.put(f"/api/transactions/{txn_id}", json=payload)

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == txn_id
        assert body["price"] == 825.0
        assert body["items"] == "Monthly Rent (new lease)"
        assert body["dateOnly"] == "2024-11-02"
        assert client.get(f"/api/transactions/{txn_id}").json() == body

    def test_update_validation_error(self, client):
        txn_id = rent_id(client)
        before = client.get(f"/api/transactions/{txn_id}").json()

        response = client.put(
            f"/api/transactions/{txn_id}",
            json={"price": -5, "items": "", "dateTime": "2024-11-02T09:00:00", "category": "Rent"},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["message"] == "Validation error"
        assert {err["field"] for err in body["errors"]} == {"price", "items"}
        assert client.get(f"/api/transactions/{txn_id}").json() == before

    def test_update_missing(self, client):
        response = client.put(
            "/api/transactions/9999",
            json={"price": 5, "items": "x", "dateTime": "2024-11-02T09:00:00", "category": "Rent"},
        )
        assert response.status_code == 404

    def test_update_without_body(self, client):
        response = client.put(f"/api/transactions/{rent_id(client)}")
        assert response.status_code == 400


class TestMetrics:
    def test_summary(self, client):
        response = client.get("/api/metrics/summary")

        assert response.status_code == 200
        assert response.json() == {
            "todayTotal": 20.0,
            "todayTrend": -60.0,
            "monthTotal": 907.5,
            "monthTrend": 807.5,
            "topCategory": "Rent",
            "topCategoryAmount": 800.0,
            "topCategoryPercentage": 88.15,
            "dailyAverage": 30.25,
        }

    def test_categories(self, client):
        body = client.get("/api/metrics/categories").json()

        assert body[0] == {"category": "Rent", "total": 800.0, "percentage": 88.15}
        assert len(body) == 5

    def test_daily(self, client):
        body = client.get("/api/metrics/daily", params={"days": 3}).json()

        assert body == [
            {"date": "2024-11-18", "total": 0.0},
            {"date": "2024-11-19", "total": 45.0},
            {"date": "2024-11-20", "total": 20.0},
        ]

    def test_daily_default_length(self, client):
        assert len(client.get("/api/metrics/daily").json()) == 7

    @pytest.mark.parametrize("days", ["0", "week"])
    def test_daily_invalid_days(self, client, days):
        response = client.get("/api/metrics/daily", params={"days": days})

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "days"

    def test_summary_failure(self):
        response = client_for(ExplodingStorage()).get("/api/metrics/summary")

        assert response.status_code == 500
        assert response.json() == {"message": "Failed to fetch spending summary"}
