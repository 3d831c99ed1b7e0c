"""Storage capability interface shared by every backing store."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, Optional

from spendtrack.models import Transaction, TransactionEdit


@dataclass
class TransactionQuery:
    """Normalized filter, sort and paging parameters."""

    search: Optional[str] = None
    category: Optional[str] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    user_id: Optional[int] = None
    sort_field: str = "date"
    descending: bool = True
    offset: int = 0
    limit: int = 10

    def matches(self, txn: Transaction) -> bool:
        """Evaluate the filters against one record in Python."""
        if self.user_id is not None and txn.user_id != self.user_id:
            return False
        if self.category and txn.category != self.category:
            return False
        if self.search and self.search.lower() not in txn.items.lower():
            return False
        if self.date_from and txn.date_only < self.date_from:
            return False
        if self.date_to and txn.date_only > self.date_to:
            return False
        return True


@dataclass
class QueryResult:
    """One page of a filtered listing."""

    transactions: list[Transaction] = field(default_factory=list)
    total: int = 0
    filtered_total: float = 0.0


class TransactionStorage(ABC):
    """List, get, update and aggregate transactions.

    Date ranges passed to the aggregate methods are inclusive on both ends
    and are compared against ``date_only``.
    """

    @abstractmethod
    def list_transactions(self, query: TransactionQuery) -> QueryResult:
        """Filter, sort and slice transactions."""

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Return the transaction or None if it does not exist."""

    @abstractmethod
    def update_transaction(
        self, transaction_id: int, edit: TransactionEdit
    ) -> Optional[Transaction]:
        """Replace the editable fields. Returns None if not found."""

    @abstractmethod
    def insert_transactions(self, transactions: Iterable[Transaction]) -> int:
        """Add new records, assigning ids. Returns the number inserted."""

    @abstractmethod
    def count(self) -> int:
        """Number of stored transactions."""

    @abstractmethod
    def total_between(
        self, start: date, end: date, user_id: Optional[int] = None
    ) -> float:
        """Sum of price for dates in [start, end]."""

    @abstractmethod
    def category_totals_between(
        self, start: date, end: date, user_id: Optional[int] = None
    ) -> dict[str, float]:
        """Sum of price per category for dates in [start, end]."""

    @abstractmethod
    def daily_totals_between(
        self, start: date, end: date, user_id: Optional[int] = None
    ) -> dict[date, float]:
        """Sum of price per day for dates in [start, end]. Empty days are absent."""
