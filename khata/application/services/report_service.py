"""Report service — balance aggregation views and the dashboard summary."""

from datetime import date
from typing import Any, Dict, List, Optional

from khata.application.services.transaction_service import to_read
from khata.config import get_settings
from khata.core.exceptions import EntityNotFoundException
from khata.core.responses import format_currency
from khata.domain.models.transaction import CREDIT, DEBIT
from khata.domain.repositories.customer_repository import CustomerRepository
from khata.domain.repositories.transaction_repository import TransactionRepository
from khata.domain.schemas.auth import CurrentUser
from khata.domain.schemas.customer import CustomerRead
from khata.domain.schemas.transaction import TransactionFilter

settings = get_settings()

LATEST_ENTRIES = 5


def _period(start_date: Optional[date], end_date: Optional[date]) -> Dict[str, Optional[date]]:
    return {"start_date": start_date, "end_date": end_date}


def summarize(rows: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Fold per-type aggregate rows into a per-type map plus net totals."""
    by_type: Dict[str, Dict[str, Any]] = {}
    for row in rows:
        by_type[row["type"]] = {
            "count": row["count"],
            "total_amount": row["total_amount"],
            "formatted_amount": format_currency(row["total_amount"]),
        }

    credit = by_type.get(CREDIT, {"count": 0, "total_amount": 0.0})
    debit = by_type.get(DEBIT, {"count": 0, "total_amount": 0.0})
    net_balance = credit["total_amount"] - debit["total_amount"]

    return {
        "summary": by_type,
        "totals": {
            "total_credit": credit["total_amount"],
            "total_debit": debit["total_amount"],
            "net_balance": net_balance,
            "formatted_net_balance": format_currency(net_balance),
            "credit_count": credit["count"],
            "debit_count": debit["count"],
            "total_transactions": credit["count"] + debit["count"],
        },
    }


def balance_report(repo: TransactionRepository, current: CurrentUser, customer_id: Optional[int] = None) -> Dict[str, Any]:
    balance = repo.get_balance(current.user_id, customer_id)
    report: Dict[str, Any] = {
        "balance": balance,
        "formatted_balance": format_currency(balance),
    }
    if customer_id is not None:
        report["customer_id"] = customer_id
    return report


def summary_report(
    repo: TransactionRepository,
    current: CurrentUser,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> Dict[str, Any]:
    rows = repo.get_summary(current.user_id, start_date, end_date)
    return {"period": _period(start_date, end_date), **summarize(rows)}


def customer_report(
    repo: TransactionRepository,
    customer_repo: CustomerRepository,
    current: CurrentUser,
    customer_id: int,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> Dict[str, Any]:
    customer = customer_repo.get_for_owner(customer_id, current.user_id)
    if customer is None:
        raise EntityNotFoundException("Customer not found")

    filters = TransactionFilter(
        customer_id=customer_id,
        start_date=start_date,
        end_date=end_date,
        page=1,
        limit=settings.REPORT_ROW_LIMIT,
    )
    transactions = [to_read(row) for row in repo.list_for_owner(current.user_id, filters)]
    aggregates = summarize(repo.get_summary(current.user_id, start_date, end_date, customer_id=customer_id))

    return {
        "customer": CustomerRead.model_validate(customer).model_copy(
            update={"balance": customer_repo.get_balance(customer_id, current.user_id)}
        ),
        "period": _period(start_date, end_date),
        "summary": aggregates["totals"],
        "transactions": transactions,
    }


def monthly_report(
    repo: TransactionRepository,
    current: CurrentUser,
    year: Optional[int] = None,
    month: Optional[int] = None,
) -> List[Dict[str, Any]]:
    months = repo.get_monthly(current.user_id, year, month)
    for row in months:
        row["formatted_balance"] = format_currency(row["balance"])
    return months


def customers_report(
    customer_repo: CustomerRepository,
    current: CurrentUser,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
) -> Dict[str, Any]:
    return {
        "period": _period(start_date, end_date),
        "customers": customer_repo.balance_breakdown(current.user_id, start_date, end_date),
    }


def dashboard_summary(repo: TransactionRepository, current: CurrentUser) -> Dict[str, Any]:
    totals = summarize(repo.get_summary(current.user_id))["totals"]
    return {
        "total_credit": totals["total_credit"],
        "total_debit": totals["total_debit"],
        "balance": totals["net_balance"],
        "formatted_balance": totals["formatted_net_balance"],
        "total_transactions": totals["total_transactions"],
        "latest_entries": [to_read(row) for row in repo.latest(current.user_id, LATEST_ENTRIES)],
    }
