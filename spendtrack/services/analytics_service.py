"""Service for spending summaries and aggregations."""

from datetime import date, datetime, timedelta
from typing import Callable, Optional

from spendtrack.exceptions import ValidationError
from spendtrack.models import CategorySummary, DailySpending, SpendingSummary
from spendtrack.services.periods import days_in_month, month_bounds, previous_month_bounds
from spendtrack.storage import TransactionStorage

# Days before today used as the baseline for today's trend
TREND_WINDOW_DAYS = 7


def _percentage(part: float, whole: float) -> float:
    return (part / whole) * 100 if whole > 0 else 0.0


class AnalyticsService:
    """Service for spending summaries and aggregations.

    Every figure is computed relative to ``clock()``, the current local time
    by default.
    """

    def __init__(
        self,
        storage: TransactionStorage,
        user_id: Optional[int] = None,
        default_daily_days: int = 7,
        max_daily_days: int = 366,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.storage = storage
        self.user_id = user_id
        self.default_daily_days = default_daily_days
        self.max_daily_days = max_daily_days
        self.clock = clock

    def _today(self) -> date:
        return self.clock().date()

    def get_spending_summary(self) -> SpendingSummary:
        """
        Get today and month totals with their trends, the top category of the
        month and the month's daily average.

        todayTrend is inverted: spending less than the trailing average
        yields a positive value.
        """
        today = self._today()

        today_total = self.storage.total_between(today, today, self.user_id)

        window_start = today - timedelta(days=TREND_WINDOW_DAYS)
        window_end = today - timedelta(days=1)
        window_total = self.storage.total_between(window_start, window_end, self.user_id)
        avg_daily = window_total / TREND_WINDOW_DAYS
        today_trend = ((today_total - avg_daily) / avg_daily) * -100 if avg_daily > 0 else 0.0

        month_start, month_end = month_bounds(today)
        month_total = self.storage.total_between(month_start, month_end, self.user_id)

        last_start, last_end = previous_month_bounds(today)
        last_month_total = self.storage.total_between(last_start, last_end, self.user_id)
        month_trend = (
            ((month_total - last_month_total) / last_month_total) * 100
            if last_month_total > 0
            else 0.0
        )

        by_category = self.storage.category_totals_between(
            month_start, month_end, self.user_id
        )
        top_category, top_amount = "None", 0.0
        if by_category:
            top_category, top_amount = min(
                by_category.items(), key=lambda item: (-item[1], item[0])
            )

        return SpendingSummary(
            today_total=round(today_total, 2),
            today_trend=round(today_trend, 2),
            month_total=round(month_total, 2),
            month_trend=round(month_trend, 2),
            top_category=top_category,
            top_category_amount=round(top_amount, 2),
            top_category_percentage=round(_percentage(top_amount, month_total), 2),
            daily_average=round(month_total / days_in_month(today), 2),
        )

    def get_category_summary(self) -> list[CategorySummary]:
        """
        Get this month's spending per category, largest first.

        Categories without spending this month are left out.
        """
        month_start, month_end = month_bounds(self._today())
        totals = self.storage.category_totals_between(month_start, month_end, self.user_id)
        month_total = sum(totals.values())

        ordered = sorted(totals.items(), key=lambda item: (-item[1], item[0]))
        return [
            CategorySummary(
                category=category,
                total=round(total, 2),
                percentage=round(_percentage(total, month_total), 2),
            )
            for category, total in ordered
        ]

    def get_daily_spending(self, days: Optional[int] = None) -> list[DailySpending]:
        """
        Get spending per day for the last ``days`` days ending today.

        Days without transactions are returned with a total of 0.
        """
        if days is None:
            days = self.default_daily_days
        if days < 1 or days > self.max_daily_days:
            raise ValidationError.single(
                "days", f"days must be between 1 and {self.max_daily_days}"
            )

        today = self._today()
        start = today - timedelta(days=days - 1)
        totals = self.storage.daily_totals_between(start, today, self.user_id)

        series = []
        for offset in range(days):
            day = start + timedelta(days=offset)
            series.append(DailySpending(date=day, total=round(totals.get(day, 0.0), 2)))
        return series
