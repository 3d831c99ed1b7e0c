"""In-memory transaction store keyed by id."""

import logging
from collections import defaultdict
from datetime import date
from typing import Iterable, Optional

from spendtrack.models import Transaction, TransactionEdit
from spendtrack.storage.base import QueryResult, TransactionQuery, TransactionStorage

logger = logging.getLogger(__name__)


def _copy(txn: Transaction) -> Transaction:
    return Transaction(**txn.model_dump())


class MemoryStorage(TransactionStorage):
    """Store transactions in a dict. Callers always receive copies."""

    def __init__(self):
        self._transactions: dict[int, Transaction] = {}
        self._next_id = 1

    def _scoped(self, start: date, end: date, user_id: Optional[int]) -> list[Transaction]:
        query = TransactionQuery(date_from=start, date_to=end, user_id=user_id)
        return [t for t in self._transactions.values() if query.matches(t)]

    def list_transactions(self, query: TransactionQuery) -> QueryResult:
        matched = [t for t in self._transactions.values() if query.matches(t)]

        if query.sort_field == "price":
            key = lambda t: (t.price, t.id)
        else:
            key = lambda t: (t.date_time, t.id)
        matched.sort(key=key, reverse=query.descending)

        page = matched[query.offset : query.offset + query.limit]
        return QueryResult(
            transactions=[_copy(t) for t in page],
            total=len(matched),
            filtered_total=sum(t.price for t in matched),
        )

    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        txn = self._transactions.get(transaction_id)
        return _copy(txn) if txn else None

    def update_transaction(
        self, transaction_id: int, edit: TransactionEdit
    ) -> Optional[Transaction]:
        current = self._transactions.get(transaction_id)
        if current is None:
            return None

        data = current.model_dump()
        data.update(
            price=edit.price,
            items=edit.items,
            date_time=edit.date_time,
            date_only=edit.date_only,
            category=edit.category.value,
        )
        # Swap in a new object so earlier snapshots stay untouched
        updated = Transaction(**data)
        self._transactions[transaction_id] = updated
        return _copy(updated)

    def insert_transactions(self, transactions: Iterable[Transaction]) -> int:
        inserted = 0
        for txn in transactions:
            record = _copy(txn)
            record.id = self._next_id
            self._next_id += 1
            self._transactions[record.id] = record
            inserted += 1
        logger.debug("Inserted %d transactions into memory store", inserted)
        return inserted

    def count(self) -> int:
        return len(self._transactions)

    def total_between(
        self, start: date, end: date, user_id: Optional[int] = None
    ) -> float:
        return sum(t.price for t in self._scoped(start, end, user_id))

    def category_totals_between(
        self, start: date, end: date, user_id: Optional[int] = None
    ) -> dict[str, float]:
        totals: dict[str, float] = defaultdict(float)
        for t in self._scoped(start, end, user_id):
            totals[t.category] += t.price
        return dict(totals)

    def daily_totals_between(
        self, start: date, end: date, user_id: Optional[int] = None
    ) -> dict[date, float]:
        totals: dict[date, float] = defaultdict(float)
        for t in self._scoped(start, end, user_id):
            totals[t.date_only] += t.price
        return dict(totals)
