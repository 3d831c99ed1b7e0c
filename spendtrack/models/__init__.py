"""Models package for the spending tracker."""

from spendtrack.models.schemas import (
    CategorySummary,
    DailySpending,
    Pagination,
    SpendingSummary,
    TransactionEdit,
    TransactionPage,
    TransactionRead,
)
from spendtrack.models.transaction import CATEGORIES, Category, Transaction

__all__ = [
    "CATEGORIES",
    "Category",
    "CategorySummary",
    "DailySpending",
    "Pagination",
    "SpendingSummary",
    "Transaction",
    "TransactionEdit",
    "TransactionPage",
    "TransactionRead",
]
