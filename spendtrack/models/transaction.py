"""Transaction model for the spending tracker."""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import NaiveDatetime
from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel


class Category(str, Enum):
    """Closed set of spending categories."""

    FOOD = "Food"
    PETROL = "Petrol"
    RENT = "Rent"
    HEALTHCARE = "Healthcare"
    ENTERTAINMENT = "Entertainment"
    CLOTHING = "Clothing"
    INSURANCE = "Insurance"
    COMMUNICATION = "Communication"
    LOANS = "Loans"
    TOLL = "Toll"
    TRANSPORTATION = "Transportation"
    MISCELLANEOUS = "Miscellaneous"


CATEGORIES = [c.value for c in Category]


class Transaction(SQLModel, table=True):
    """A single spending entry."""

    __tablename__ = "transactions"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Optional[int] = Field(default=None, primary_key=True)

    price: float
    items: str

    # date_only is always the calendar date of date_time
    date_time: NaiveDatetime = Field(index=True, sa_type=DateTime(timezone=False))
    date_only: date = Field(index=True)

    category: str = Field(index=True)
    user_id: Optional[int] = Field(default=None, index=True)
