"""Spending Tracker dashboard using NiceGUI."""

from datetime import datetime

import plotly.graph_objects as go
from nicegui import ui

from spendtrack.exceptions import NotFoundError, ValidationError
from spendtrack.models import CATEGORIES
from spendtrack.services import AnalyticsService, TransactionService

SORT_LABELS = {
    "date:desc": "Newest First",
    "date:asc": "Oldest First",
    "price:desc": "Highest Amount",
    "price:asc": "Lowest Amount",
}

DATE_FILTER_LABELS = {
    "all": "All Time",
    "today": "Today",
    "yesterday": "Yesterday",
    "this_week": "This Week",
    "this_month": "This Month",
}

ALL_CATEGORIES = "All Categories"

CHART_LAYOUT = dict(
    margin=dict(t=0, b=0, l=0, r=0),
    paper_bgcolor="rgba(0,0,0,0)",
    plot_bgcolor="rgba(0,0,0,0)",
    font=dict(color="#f8fafc"),
)


def format_money(value: float) -> str:
    return f"{value:,.2f}"


def daily_chart_title(days: int) -> str:
    return f"Last {days} Days"


def format_trend(value: float, suffix: str) -> str:
    arrow = "▲" if value >= 0 else "▼"
    return f"{arrow} {abs(value):.1f}% {suffix}"


class Dashboard:
    """One dashboard page; a new instance is built for every client."""

    def __init__(
        self,
        transaction_service: TransactionService,
        analytics_service: AnalyticsService,
    ):
        self.transaction_service = transaction_service
        self.analytics_service = analytics_service

        # Table state
        self.search = ""
        self.category = ALL_CATEGORIES
        self.date_filter = "all"
        self.sort_by = "date:desc"
        self.page = 1

        self._setup_styles()
        self._build_ui()

    def _setup_styles(self):
        ui.colors(primary="#38bdf8", secondary="#0ea5e9", accent="#0369a1")
        ui.query("body").style("background-color: #0f172a; color: #f8fafc;")

    def _build_ui(self):
        with ui.header().classes("items-center justify-between bg-slate-900 border-b border-slate-700"):
            ui.label("Spending Tracker").classes("text-2xl font-bold text-sky-400")
            ui.button("Refresh All", on_click=self.refresh_all, icon="refresh").props("flat color=white")

        with ui.tabs().classes("w-full bg-slate-900 text-slate-400") as tabs:
            dashboard_tab = ui.tab("Dashboard", icon="dashboard")
            transactions_tab = ui.tab("Transactions", icon="list")

        with ui.tab_panels(tabs, value=dashboard_tab).classes("w-full grow bg-transparent"):
            with ui.tab_panel(dashboard_tab):
                self._build_dashboard_tab()
            with ui.tab_panel(transactions_tab):
                self._build_transactions_tab()

    def _build_dashboard_tab(self):
        with ui.column().classes("w-full grow p-4 gap-6"):
            ui.label("Spending Overview").classes("text-2xl font-bold")

            with ui.row().classes("w-full gap-4"):
                self.today_card = self._stat_card("Today", "green-400")
                self.month_card = self._stat_card("This Month", "sky-400")
                self.top_card = self._stat_card("Top Category", "purple-400")
                self.average_card = self._stat_card("Daily Average", "amber-400")

            with ui.row().classes("w-full gap-4"):
                with ui.card().classes("grow p-4 bg-slate-800 border-slate-700"):
                    ui.label("Spending by Category").classes("text-lg font-bold mb-4")
                    self.pie_chart = ui.plotly({}).classes("w-full h-80")
                with ui.card().classes("grow p-4 bg-slate-800 border-slate-700"):
                    ui.label(daily_chart_title(self.analytics_service.default_daily_days)).classes("text-lg font-bold mb-4")
                    self.daily_chart = ui.plotly({}).classes("w-full h-80")

            self._update_analytics()

    def _stat_card(self, title: str, color: str):
        with ui.card().classes("grow p-6 bg-slate-800 border border-slate-700 items-center justify-center") as card:
            ui.label(title).classes("text-slate-400 uppercase text-xs tracking-wider")
            card.value_label = ui.label("0.00").classes(f"text-3xl font-bold text-{color}")
            card.detail_label = ui.label("").classes("text-slate-400 text-sm")
        return card

    def _build_transactions_tab(self):
        with ui.column().classes("w-full grow p-4"):
            with ui.row().classes("w-full items-center justify-between mb-4"):
                ui.label("Transactions").classes("text-2xl font-bold")
                ui.button("Edit Selected", on_click=self._edit_selected, icon="edit")

            with ui.row().classes("w-full items-center gap-4 mb-4"):
                ui.input("Search items", on_change=self._on_search).classes("w-64")
                ui.select(
                    [ALL_CATEGORIES] + CATEGORIES,
                    value=self.category,
                    label="Category",
                    on_change=lambda e: self._set_filter("category", e.value),
                ).classes("w-48")
                ui.select(
                    DATE_FILTER_LABELS,
                    value=self.date_filter,
                    label="Date Range",
                    on_change=lambda e: self._set_filter("date_filter", e.value),
                ).classes("w-40")
                ui.select(
                    SORT_LABELS,
                    value=self.sort_by,
                    label="Sort By",
                    on_change=lambda e: self._set_filter("sort_by", e.value),
                ).classes("w-40")

            columns = [
                {"name": "items", "label": "Items", "field": "items", "align": "left"},
                {"name": "category", "label": "Category", "field": "category", "align": "left"},
                {"name": "date", "label": "Date", "field": "date_time", "align": "left"},
                {"name": "price", "label": "Price", "field": "price", "align": "right"},
            ]
            self.table = ui.table(columns=columns, rows=[], row_key="id", selection="single").classes("w-full")

            with ui.row().classes("w-full items-center justify-between mt-4"):
                self.total_label = ui.label("").classes("text-slate-400")
                self.pager = ui.pagination(1, 1, direction_links=True, on_change=self._on_page)

            self._load_transactions()

    # Logic Methods
    def _on_search(self, e):
        self.search = e.value or ""
        self.page = 1
        self._load_transactions()

    def _set_filter(self, name: str, value):
        setattr(self, name, value)
        self.page = 1
        self._load_transactions()

    def _on_page(self, e):
        if e.value and e.value != self.page:
            self.page = e.value
            self._load_transactions()

    def _load_transactions(self):
        """Fetch the current page and update the table."""
        result = self.transaction_service.read_transactions(
            search=self.search,
            category=None if self.category == ALL_CATEGORIES else self.category,
            sort_by=self.sort_by,
            date_filter=self.date_filter,
            page=self.page,
        )
        rows = []
        for txn in result.transactions:
            row = txn.model_dump()
            row["date_time"] = txn.date_time.strftime("%Y-%m-%d %H:%M")
            row["price"] = format_money(txn.price)
            rows.append(row)

        self.table.rows = rows
        self.table.selected = []
        self.table.update()

        pagination = result.pagination
        self.total_label.set_text(
            f"{pagination.total} transactions, total {format_money(result.filtered_total)}"
        )
        self.pager.max = max(pagination.pages, 1)
        self.pager.value = self.page

    def _update_analytics(self):
        """Fetch metrics and update cards and charts."""
        summary = self.analytics_service.get_spending_summary()

        self.today_card.value_label.set_text(format_money(summary.today_total))
        self.today_card.detail_label.set_text(format_trend(summary.today_trend, "vs. 7 day average"))
        self.month_card.value_label.set_text(format_money(summary.month_total))
        self.month_card.detail_label.set_text(format_trend(summary.month_trend, "vs. last month"))
        self.top_card.value_label.set_text(summary.top_category)
        self.top_card.detail_label.set_text(
            f"{format_money(summary.top_category_amount)} ({summary.top_category_percentage:.1f}%)"
        )
        self.average_card.value_label.set_text(format_money(summary.daily_average))

        categories = self.analytics_service.get_category_summary()
        fig = go.Figure(data=[go.Pie(
            labels=[c.category for c in categories],
            values=[c.total for c in categories],
            hole=.4,
        )])
        fig.update_layout(showlegend=True, **CHART_LAYOUT)
        self.pie_chart.update_figure(fig)

        daily = self.analytics_service.get_daily_spending()
        fig = go.Figure(data=[go.Bar(
            x=[d.date.strftime("%a %d") for d in daily],
            y=[d.total for d in daily],
            marker_color="#38bdf8",
        )])
        fig.update_layout(**CHART_LAYOUT)
        self.daily_chart.update_figure(fig)

    def _edit_selected(self):
        """Open edit dialog for the selected row."""
        if not self.table.selected:
            ui.notify("Select a transaction first", type="warning")
            return
        try:
            txn = self.transaction_service.get_transaction(self.table.selected[0]["id"])
        except NotFoundError:
            ui.notify("Transaction not found", type="negative")
            self.refresh_all()
            return

        with ui.dialog() as dialog, ui.card().classes("w-96"):
            ui.label("Edit Transaction").classes("text-xl font-bold mb-4")
            items = ui.input("Items", value=txn.items).classes("w-full")
            price = ui.number("Price", value=txn.price, format="%.2f", min=0.01).classes("w-full")
            when = ui.input("Date & time", value=txn.date_time.strftime("%Y-%m-%d %H:%M")).classes("w-full")
            category = ui.select(CATEGORIES, label="Category", value=txn.category).classes("w-full")

            with ui.row().classes("w-full justify-end mt-4"):
                ui.button("Cancel", on_click=dialog.close).props("flat")
                ui.button("Save", on_click=lambda: self._save_edit(txn.id, {
                    "price": price.value,
                    "items": items.value,
                    "dateTime": when.value,
                    "category": category.value,
                }, dialog))
        dialog.open()

    def _save_edit(self, txn_id: int, payload: dict, dialog):
        try:
            payload["dateTime"] = datetime.strptime(payload["dateTime"].strip(), "%Y-%m-%d %H:%M")
        except ValueError:
            ui.notify("Date & time must look like 2024-11-20 15:30", type="negative")
            return
        try:
            self.transaction_service.update_transaction(txn_id, payload)
        except ValidationError as e:
            ui.notify("; ".join(f"{err['field']}: {err['message']}" for err in e.errors), type="negative")
            return
        except NotFoundError:
            ui.notify("Transaction not found", type="negative")
        else:
            ui.notify("Transaction updated", type="positive")
        dialog.close()
        self.refresh_all()

    def refresh_all(self):
        """Refresh all data views."""
        self._load_transactions()
        self._update_analytics()


def register_pages(
    transaction_service: TransactionService,
    analytics_service: AnalyticsService,
) -> None:
    """Register the dashboard at the root path."""

    @ui.page("/")
    def index():
        Dashboard(transaction_service, analytics_service)
