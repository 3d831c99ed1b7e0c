"""Services package for the spending tracker."""

from spendtrack.services.analytics_service import AnalyticsService
from spendtrack.services.sample_data import seed_sample_transactions
from spendtrack.services.transaction_service import TransactionService

__all__ = [
    "AnalyticsService",
    "TransactionService",
    "seed_sample_transactions",
]
