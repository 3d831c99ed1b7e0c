"""Shared fixtures: a fixed clock and both storage backends."""

from datetime import datetime

import pytest

from spendtrack.database import make_engine
from spendtrack.models import Transaction
from spendtrack.services import AnalyticsService, TransactionService
from spendtrack.storage import MemoryStorage, SqlStorage

# Wednesday, so "this week" starts on Monday 2024-11-18
NOW = datetime(2024, 11, 20, 15, 30)


def fixed_clock() -> datetime:
    return NOW


def make_txn(price, items, when, category, user_id=1) -> Transaction:
    when = datetime.fromisoformat(when)
    return Transaction(
        price=price,
        items=items,
        date_time=when,
        date_only=when.date(),
        category=category,
        user_id=user_id,
    )


SAMPLE = [
    make_txn(12.50, "Groceries", "2024-11-20T08:15", "Food"),
    make_txn(7.50, "Coffee beans", "2024-11-20T17:45", "Food"),
    make_txn(45.00, "Gas Station", "2024-11-19T18:00", "Petrol"),
    make_txn(800.00, "Monthly Rent", "2024-11-01T09:00", "Rent"),
    make_txn(30.00, "Movie tickets", "2024-11-15T20:00", "Entertainment"),
    make_txn(60.00, "Groceries", "2024-10-28T10:00", "Food"),
    make_txn(40.00, "Phone Bill", "2024-10-05T09:00", "Communication"),
    make_txn(12.50, "Bus ticket", "2024-11-13T07:30", "Transportation"),
]


@pytest.fixture(params=["memory", "sqlite"])
def empty_storage(request):
    if request.param == "memory":
        return MemoryStorage()
    return SqlStorage(make_engine("sqlite://"))


@pytest.fixture
def storage(empty_storage):
    empty_storage.insert_transactions(SAMPLE)
    return empty_storage


@pytest.fixture
def transaction_service(storage):
    return TransactionService(storage, clock=fixed_clock)


@pytest.fixture
def analytics_service(storage):
    return AnalyticsService(storage, clock=fixed_clock)


def id_of(service: TransactionService, items: str) -> int:
    """Look up the id of the single transaction with these items."""
    page = service.read_transactions(search=items, page_size=100)
    matches = [t for t in page.transactions if t.items == items]
    assert len(matches) == 1
    return matches[0].id
