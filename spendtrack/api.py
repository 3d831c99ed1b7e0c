# FastAPI routes for the spending tracker
# - transactions: list (filter/sort/paginate), get, update
# - metrics: spending summary, category summary, daily spending

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, FastAPI, Query, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from spendtrack.exceptions import NotFoundError, StorageError, ValidationError
from spendtrack.models import (
    CategorySummary,
    DailySpending,
    SpendingSummary,
    TransactionPage,
    TransactionRead,
)
from spendtrack.services import AnalyticsService, TransactionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


# ----------------------------
# Helpers
# ----------------------------
def get_transaction_service(request: Request) -> TransactionService:
    return request.app.state.transaction_service


def get_analytics_service(request: Request) -> AnalyticsService:
    return request.app.state.analytics_service


@contextmanager
def failure_message(message: str):
    """
    Turn anything other than NotFoundError/ValidationError into a
    StorageError carrying only ``message``. The original error is logged.
    """
    try:
        yield
    except (NotFoundError, ValidationError):
        raise
    except Exception as e:
        logger.exception(message)
        raise StorageError(message) from e


def _validation_response(errors: List[Dict[str, Any]]) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"message": "Validation error", "errors": errors},
    )


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(NotFoundError)
    async def not_found_handler(_request: Request, _exc: NotFoundError):
        return JSONResponse(status_code=404, content={"message": "Transaction not found"})

    @app.exception_handler(ValidationError)
    async def validation_handler(_request: Request, exc: ValidationError):
        return _validation_response(exc.errors)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(_request: Request, exc: RequestValidationError):
        errors = []
        for err in exc.errors():
            # Drop the "query"/"path"/"body" prefix
            loc = [str(part) for part in err.get("loc", ())][1:]
            errors.append({"field": ".".join(loc) or "body", "message": err.get("msg", "")})
        return _validation_response(errors)

    @app.exception_handler(StorageError)
    async def storage_handler(_request: Request, exc: StorageError):
        return JSONResponse(status_code=500, content={"message": str(exc)})


# ----------------------------
# Transactions
# ----------------------------
@router.get("/transactions", response_model=TransactionPage)
def list_transactions(
    search: Optional[str] = None,
    category: Optional[str] = None,
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    date_filter: Optional[str] = Query(None, alias="dateFilter"),
    page: int = 1,
    limit: Optional[int] = None,
    service: TransactionService = Depends(get_transaction_service),
):
    with failure_message("Failed to fetch transactions"):
        return service.read_transactions(
            search=search,
            category=category,
            sort_by=sort_by,
            date_filter=date_filter,
            page=page,
            page_size=limit,
        )


@router.get("/transactions/{transaction_id}", response_model=TransactionRead)
def get_transaction(
    transaction_id: int,
    service: TransactionService = Depends(get_transaction_service),
):
    with failure_message("Failed to fetch transaction"):
        return service.get_transaction(transaction_id)


@router.put("/transactions/{transaction_id}", response_model=TransactionRead)
def update_transaction(
    transaction_id: int,
    payload: Dict[str, Any] = Body(...),
    service: TransactionService = Depends(get_transaction_service),
):
    with failure_message("Failed to update transaction"):
        return service.update_transaction(transaction_id, payload)


# ----------------------------
# Metrics
# ----------------------------
@router.get("/metrics/summary", response_model=SpendingSummary)
def spending_summary(service: AnalyticsService = Depends(get_analytics_service)):
    with failure_message("Failed to fetch spending summary"):
        return service.get_spending_summary()


@router.get("/metrics/categories", response_model=List[CategorySummary])
def category_summary(service: AnalyticsService = Depends(get_analytics_service)):
    with failure_message("Failed to fetch category summary"):
        return service.get_category_summary()


@router.get("/metrics/daily", response_model=List[DailySpending])
def daily_spending(
    days: Optional[int] = None,
    service: AnalyticsService = Depends(get_analytics_service),
):
    with failure_message("Failed to fetch daily spending"):
        return service.get_daily_spending(days)


# ----------------------------
# Composition
# ----------------------------
def install_api(
    app: FastAPI,
    transaction_service: TransactionService,
    analytics_service: AnalyticsService,
) -> FastAPI:
    """Attach the services, error handlers and routes to an existing app."""
    app.state.transaction_service = transaction_service
    app.state.analytics_service = analytics_service
    register_error_handlers(app)
    app.include_router(router)
    return app


def create_app(
    transaction_service: TransactionService,
    analytics_service: AnalyticsService,
    title: str = "Spending Tracker API",
) -> FastAPI:
    return install_api(FastAPI(title=title), transaction_service, analytics_service)
