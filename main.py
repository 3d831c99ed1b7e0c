from nicegui import app, ui

from spendtrack.api import install_api
from spendtrack.app import register_pages
from spendtrack.config import settings
from spendtrack.log import setup_logging
from spendtrack.services import AnalyticsService, TransactionService, seed_sample_transactions
from spendtrack.storage import create_storage


def main():
    setup_logging(settings.log_level)

    storage = create_storage(settings)
    if settings.seed_sample_data:
        seed_sample_transactions(storage)

    transaction_service = TransactionService(
        storage,
        user_id=settings.user_id,
        default_page_size=settings.default_page_size,
        max_page_size=settings.max_page_size,
    )
    analytics_service = AnalyticsService(
        storage,
        user_id=settings.user_id,
        default_daily_days=settings.default_daily_days,
        max_daily_days=settings.max_daily_days,
    )

    # REST API under /api, dashboard at /
    install_api(app, transaction_service, analytics_service)
    register_pages(transaction_service, analytics_service)

    ui.run(
        title=settings.title,
        host=settings.host,
        port=settings.port,
        native=settings.native,
        reload=False,
    )


if __name__ in {"__main__", "__mp_main__"}:
    main()
