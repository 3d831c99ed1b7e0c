"""Random sample transactions for a fresh store."""

import logging
import random
from datetime import datetime, time, timedelta
from typing import Callable, Optional

from spendtrack.models import CATEGORIES, Transaction
from spendtrack.storage import TransactionStorage

logger = logging.getLogger(__name__)

SAMPLE_ITEMS = [
    "Groceries",
    "Gas Station",
    "Monthly Rent",
    "Pharmacy",
    "Movie Tickets",
    "T-shirt",
    "Car Insurance",
    "Phone Bill",
    "Loan Payment",
    "Highway Toll",
    "Bus Ticket",
    "Coffee",
]


def build_sample_transactions(
    count: int = 20,
    days: int = 30,
    user_id: int = 1,
    rng: Optional[random.Random] = None,
    clock: Callable[[], datetime] = datetime.now,
) -> list[Transaction]:
    """Create ``count`` transactions spread over the last ``days`` days."""
    rng = rng or random.Random()
    today = clock().date()

    transactions = []
    for _ in range(count):
        day = today - timedelta(days=rng.randrange(days))
        moment = datetime.combine(
            day, time(hour=rng.randrange(24), minute=rng.randrange(60))
        )
        transactions.append(
            Transaction(
                price=round(rng.randint(1, 10000) / 100, 2),
                items=rng.choice(SAMPLE_ITEMS),
                date_time=moment,
                date_only=day,
                category=rng.choice(CATEGORIES),
                user_id=user_id,
            )
        )
    return transactions


def seed_sample_transactions(storage: TransactionStorage, **kwargs) -> int:
    """Fill an empty store with sample transactions. Returns the number inserted."""
    if storage.count():
        logger.info("Store already holds transactions, skipping sample data")
        return 0
    inserted = storage.insert_transactions(build_sample_transactions(**kwargs))
    logger.info("Seeded %d sample transactions", inserted)
    return inserted
