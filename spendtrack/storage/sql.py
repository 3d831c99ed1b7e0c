"""Relational transaction store backed by SQLModel."""

import logging
from datetime import date
from typing import Iterable, Optional

from sqlalchemy import String
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import col, func, select

from spendtrack.database import get_session, init_db
from spendtrack.exceptions import StorageError
from spendtrack.models import Transaction, TransactionEdit
from spendtrack.storage.base import QueryResult, TransactionQuery, TransactionStorage

logger = logging.getLogger(__name__)


def _conditions(query: TransactionQuery) -> list:
    """Build WHERE clauses. Values are always passed as bound parameters."""
    conditions = []
    if query.user_id is not None:
        conditions.append(Transaction.user_id == query.user_id)
    if query.category:
        conditions.append(Transaction.category == query.category)
    if query.search:
        items = func.unicode_lower(col(Transaction.items), type_=String)
        conditions.append(items.contains(query.search.lower(), autoescape=True))
    if query.date_from:
        conditions.append(Transaction.date_only >= query.date_from)
    if query.date_to:
        conditions.append(Transaction.date_only <= query.date_to)
    return conditions


class SqlStorage(TransactionStorage):
    """Store transactions in a SQL database through SQLModel sessions."""

    def __init__(self, engine: Engine, create_tables: bool = True):
        self.engine = engine
        if create_tables:
            init_db(engine)

    def list_transactions(self, query: TransactionQuery) -> QueryResult:
        conditions = _conditions(query)

        if query.sort_field == "price":
            sort_column = col(Transaction.price)
        else:
            sort_column = col(Transaction.date_time)
        id_column = col(Transaction.id)
        if query.descending:
            order = (sort_column.desc(), id_column.desc())
        else:
            order = (sort_column.asc(), id_column.asc())

        try:
            with get_session(self.engine) as session:
                total = session.exec(
                    select(func.count()).select_from(Transaction).where(*conditions)
                ).one()
                filtered_total = session.exec(
                    select(func.coalesce(func.sum(Transaction.price), 0.0)).where(*conditions)
                ).one()
                transactions = []
                # An offset past the end can overflow SQLite's integer range
                if query.offset < total:
                    transactions = session.exec(
                        select(Transaction)
                        .where(*conditions)
                        .order_by(*order)
                        .offset(query.offset)
                        .limit(query.limit)
                    ).all()
        except SQLAlchemyError as exc:
            raise StorageError("Failed to list transactions") from exc

        return QueryResult(
            transactions=list(transactions),
            total=int(total),
            filtered_total=float(filtered_total),
        )

    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        try:
            with get_session(self.engine) as session:
                return session.get(Transaction, transaction_id)
        except SQLAlchemyError as exc:
            raise StorageError("Failed to read transaction") from exc

    def update_transaction(
        self, transaction_id: int, edit: TransactionEdit
    ) -> Optional[Transaction]:
        try:
            with get_session(self.engine) as session:
                transaction = session.get(Transaction, transaction_id)
                if not transaction:
                    return None

                transaction.price = edit.price
                transaction.items = edit.items
                transaction.date_time = edit.date_time
                transaction.date_only = edit.date_only
                transaction.category = edit.category.value

                session.add(transaction)
                session.commit()
                session.refresh(transaction)
                return transaction
        except SQLAlchemyError as exc:
            raise StorageError("Failed to update transaction") from exc

    def insert_transactions(self, transactions: Iterable[Transaction]) -> int:
        inserted = 0
        try:
            with get_session(self.engine) as session:
                for txn in transactions:
                    record = Transaction(**txn.model_dump(exclude={"id"}))
                    session.add(record)
                    inserted += 1
                session.commit()
        except SQLAlchemyError as exc:
            raise StorageError("Failed to insert transactions") from exc

        logger.debug("Inserted %d transactions into database", inserted)
        return inserted

    def count(self) -> int:
        try:
            with get_session(self.engine) as session:
                return int(session.exec(select(func.count()).select_from(Transaction)).one())
        except SQLAlchemyError as exc:
            raise StorageError("Failed to count transactions") from exc

    def _range(self, start: date, end: date, user_id: Optional[int]) -> list:
        return _conditions(TransactionQuery(date_from=start, date_to=end, user_id=user_id))

    def total_between(
        self, start: date, end: date, user_id: Optional[int] = None
    ) -> float:
        try:
            with get_session(self.engine) as session:
                total = session.exec(
                    select(func.coalesce(func.sum(Transaction.price), 0.0)).where(
                        *self._range(start, end, user_id)
                    )
                ).one()
        except SQLAlchemyError as exc:
            raise StorageError("Failed to sum transactions") from exc
        return float(total)

    def category_totals_between(
        self, start: date, end: date, user_id: Optional[int] = None
    ) -> dict[str, float]:
        try:
            with get_session(self.engine) as session:
                rows = session.exec(
                    select(Transaction.category, func.sum(Transaction.price))
                    .where(*self._range(start, end, user_id))
                    .group_by(Transaction.category)
                ).all()
        except SQLAlchemyError as exc:
            raise StorageError("Failed to group transactions by category") from exc
        return {category: float(total) for category, total in rows}

    def daily_totals_between(
        self, start: date, end: date, user_id: Optional[int] = None
    ) -> dict[date, float]:
        try:
            with get_session(self.engine) as session:
                rows = session.exec(
                    select(Transaction.date_only, func.sum(Transaction.price))
                    .where(*self._range(start, end, user_id))
                    .group_by(Transaction.date_only)
                ).all()
        except SQLAlchemyError as exc:
            raise StorageError("Failed to group transactions by day") from exc
        return {day: float(total) for day, total in rows}
