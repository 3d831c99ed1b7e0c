"""Tests for sample data seeding."""

import random
from datetime import date, timedelta

from spendtrack.models import CATEGORIES
from spendtrack.services import seed_sample_transactions
from spendtrack.services.sample_data import SAMPLE_ITEMS, build_sample_transactions
from tests.conftest import NOW, fixed_clock, make_txn


def test_build_sample_transactions():
    transactions = build_sample_transactions(rng=random.Random(7), clock=fixed_clock)

    assert len(transactions) == 20
    earliest = NOW.date() - timedelta(days=29)
    for txn in transactions:
        assert earliest <= txn.date_only <= NOW.date()
        assert txn.date_only == txn.date_time.date()
        assert 0 < txn.price <= 100
        assert txn.items in SAMPLE_ITEMS
        assert txn.category in CATEGORIES
        assert txn.user_id == 1


def test_same_seed_same_data():
    first = build_sample_transactions(rng=random.Random(3), clock=fixed_clock)
    second = build_sample_transactions(rng=random.Random(3), clock=fixed_clock)
    assert [t.model_dump() for t in first] == [t.model_dump() for t in second]


def test_seed_fills_empty_store(empty_storage):
    inserted = seed_sample_transactions(
        empty_storage, count=5, rng=random.Random(1), clock=fixed_clock
    )

    assert inserted == 5
    assert empty_storage.count() == 5


def test_seed_skips_populated_store(empty_storage):
    empty_storage.insert_transactions([make_txn(1.0, "Gum", "2024-11-20T10:00", "Food")])

    assert seed_sample_transactions(empty_storage, rng=random.Random(1)) == 0
    assert empty_storage.count() == 1


def test_ids_are_assigned_in_order(empty_storage):
    seed_sample_transactions(empty_storage, count=3, rng=random.Random(1), clock=fixed_clock)

    assert empty_storage.get_transaction(1) is not None
    assert empty_storage.get_transaction(3) is not None
    assert empty_storage.get_transaction(4) is None
    assert empty_storage.get_transaction(1).date_only <= date(2024, 11, 20)
