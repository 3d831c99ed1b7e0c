"""Request and response schemas exchanged with the presentation layer."""

from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from spendtrack.models.transaction import Category


class CamelModel(BaseModel):
    """Base schema serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class TransactionEdit(CamelModel):
    """Full replacement of the editable fields of a transaction.

    ``dateOnly`` may be omitted, in which case it is taken from ``dateTime``.
    When supplied it has to agree with the date of ``dateTime``.
    """

    model_config = ConfigDict(extra="ignore")

    price: float = Field(gt=0, allow_inf_nan=False)
    items: str = Field(min_length=1)
    date_time: datetime
    date_only: Optional[date] = Field(default=None, validate_default=True)
    category: Category

    @field_validator("price")
    @classmethod
    def round_price(cls, value: float) -> float:
        value = round(value, 2)
        if value <= 0:
            raise ValueError("price must be at least 0.01")
        return value

    @field_validator("items")
    @classmethod
    def items_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("items must not be empty")
        return value

    @field_validator("date_time")
    @classmethod
    def to_local_naive(cls, value: datetime) -> datetime:
        if value.tzinfo is not None:
            return value.astimezone().replace(tzinfo=None)
        return value

    @field_validator("date_only")
    @classmethod
    def matches_date_time(cls, value: Optional[date], info: ValidationInfo) -> Optional[date]:
        date_time = info.data.get("date_time")
        if date_time is None:
            # dateTime already failed, nothing to compare against
            return value
        if value is None:
            return date_time.date()
        if value != date_time.date():
            raise ValueError("dateOnly must be the calendar date of dateTime")
        return value


class TransactionRead(CamelModel):
    id: int
    price: float
    items: str
    date_time: datetime
    date_only: date
    category: str
    user_id: Optional[int] = None


class Pagination(CamelModel):
    total: int
    page: int
    limit: int
    pages: int


class TransactionPage(CamelModel):
    transactions: list[TransactionRead]
    pagination: Pagination
    filtered_total: float


class SpendingSummary(CamelModel):
    today_total: float
    today_trend: float
    month_total: float
    month_trend: float
    top_category: str
    top_category_amount: float
    top_category_percentage: float
    daily_average: float


class CategorySummary(CamelModel):
    category: str
    total: float
    percentage: float


class DailySpending(CamelModel):
    date: date
    total: float
