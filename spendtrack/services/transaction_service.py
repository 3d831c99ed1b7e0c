"""Service for listing, reading and editing transactions."""

import logging
import math
from datetime import date, datetime, timedelta
from typing import Any, Callable, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from spendtrack.exceptions import NotFoundError, ValidationError
from spendtrack.models import (
    CATEGORIES,
    Pagination,
    TransactionEdit,
    TransactionPage,
    TransactionRead,
)
from spendtrack.services.periods import month_bounds
from spendtrack.storage import TransactionQuery, TransactionStorage

logger = logging.getLogger(__name__)

SORT_OPTIONS = ("date:desc", "date:asc", "price:desc", "price:asc")
DATE_FILTERS = ("all", "today", "yesterday", "this_week", "this_month")
DEFAULT_SORT = "date:desc"


def date_filter_range(
    date_filter: Optional[str], today: date
) -> tuple[Optional[date], Optional[date]]:
    """Translate a named date filter into an inclusive date range."""
    if not date_filter or date_filter == "all":
        return None, None
    if date_filter == "today":
        return today, today
    if date_filter == "yesterday":
        yesterday = today - timedelta(days=1)
        return yesterday, yesterday
    if date_filter == "this_week":
        return today - timedelta(days=today.weekday()), today
    if date_filter == "this_month":
        return month_bounds(today)
    raise ValidationError.single(
        "dateFilter", f"dateFilter must be one of {', '.join(DATE_FILTERS)}"
    )


class TransactionService:
    """Service for listing, reading and editing transactions."""

    def __init__(
        self,
        storage: TransactionStorage,
        user_id: Optional[int] = None,
        default_page_size: int = 10,
        max_page_size: int = 100,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.storage = storage
        self.user_id = user_id
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size
        self.clock = clock

    def read_transactions(
        self,
        search: Optional[str] = None,
        category: Optional[str] = None,
        sort_by: Optional[str] = None,
        date_filter: Optional[str] = None,
        page: int = 1,
        page_size: Optional[int] = None,
    ) -> TransactionPage:
        """
        Read transactions with filtering, sorting, and pagination.

        ``filtered_total`` is the sum over every match, not only the
        returned page. Invalid parameters raise ValidationError.
        """
        if page_size is None:
            page_size = self.default_page_size

        errors = []
        if page < 1:
            errors.append({"field": "page", "message": "page must be at least 1"})
        if page_size < 1 or page_size > self.max_page_size:
            errors.append({
                "field": "limit",
                "message": f"limit must be between 1 and {self.max_page_size}",
            })
        sort_by = sort_by or DEFAULT_SORT
        if sort_by not in SORT_OPTIONS:
            errors.append({
                "field": "sortBy",
                "message": f"sortBy must be one of {', '.join(SORT_OPTIONS)}",
            })
        if category and category not in CATEGORIES:
            errors.append({"field": "category", "message": f"Unknown category '{category}'"})
        if date_filter and date_filter not in DATE_FILTERS:
            errors.append({
                "field": "dateFilter",
                "message": f"dateFilter must be one of {', '.join(DATE_FILTERS)}",
            })
        if errors:
            raise ValidationError(errors)

        date_from, date_to = date_filter_range(date_filter, self.clock().date())
        sort_field, direction = sort_by.split(":")

        query = TransactionQuery(
            search=search.strip() if search and search.strip() else None,
            category=category or None,
            date_from=date_from,
            date_to=date_to,
            user_id=self.user_id,
            sort_field=sort_field,
            descending=direction == "desc",
            offset=(page - 1) * page_size,
            limit=page_size,
        )
        result = self.storage.list_transactions(query)

        return TransactionPage(
            transactions=[TransactionRead.model_validate(t) for t in result.transactions],
            pagination=Pagination(
                total=result.total,
                page=page,
                limit=page_size,
                pages=math.ceil(result.total / page_size),
            ),
            filtered_total=round(result.filtered_total, 2),
        )

    def get_transaction(self, transaction_id: int) -> TransactionRead:
        """Get a transaction by id or raise NotFoundError."""
        transaction = self.storage.get_transaction(transaction_id)
        if transaction is None or (
            self.user_id is not None and transaction.user_id != self.user_id
        ):
            raise NotFoundError(transaction_id)
        return TransactionRead.model_validate(transaction)

    def update_transaction(
        self, transaction_id: int, payload: Union[TransactionEdit, dict[str, Any]]
    ) -> TransactionRead:
        """
        Replace the editable fields of a transaction.

        The payload is validated before the store is touched. Raises
        ValidationError with every failing field, or NotFoundError.
        """
        if isinstance(payload, TransactionEdit):
            edit = payload
        else:
            try:
                edit = TransactionEdit.model_validate(payload)
            except PydanticValidationError as exc:
                raise ValidationError.from_pydantic(exc) from exc

        self.get_transaction(transaction_id)

        updated = self.storage.update_transaction(transaction_id, edit)
        if updated is None:
            raise NotFoundError(transaction_id)

        logger.info("Updated transaction %d", transaction_id)
        return TransactionRead.model_validate(updated)
