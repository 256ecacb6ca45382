"""Report endpoints: balance, summary, customer statement, monthly and per-customer views."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query

from khata.application.services.report_service import (
    balance_report,
    customer_report,
    customers_report,
    monthly_report,
    summary_report,
)
from khata.core.exceptions import EntityNotFoundException, ValidationException
from khata.core.responses import success
from khata.domain.repositories.customer_repository import CustomerRepository
from khata.domain.repositories.transaction_repository import TransactionRepository
from khata.domain.schemas.auth import CurrentUser
from khata.interfaces.api.deps import get_current_user
from khata.interfaces.deps import get_customer_repository, get_transaction_repository

router = APIRouter(prefix="/api/reports", tags=["Reports"])


@router.get("")
def report_index(user: CurrentUser = Depends(get_current_user)):
    raise ValidationException("Report type required")


@router.get("/balance")
def balance(
    customer_id: Optional[int] = None,
    repo: TransactionRepository = Depends(get_transaction_repository),
    user: CurrentUser = Depends(get_current_user),
):
    return success(balance_report(repo, user, customer_id))


@router.get("/summary")
def summary(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    repo: TransactionRepository = Depends(get_transaction_repository),
    user: CurrentUser = Depends(get_current_user),
):
    return success(summary_report(repo, user, start_date, end_date))


@router.get("/customer")
def customer(
    customer_id: Optional[int] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    repo: TransactionRepository = Depends(get_transaction_repository),
    customer_repo: CustomerRepository = Depends(get_customer_repository),
    user: CurrentUser = Depends(get_current_user),
):
    if customer_id is None:
        raise ValidationException(
            "Customer ID is required",
            details=[{"field": "customer_id", "message": "Field 'customer_id' is required"}],
        )
    return success(customer_report(repo, customer_repo, user, customer_id, start_date, end_date))


@router.get("/monthly")
def monthly(
    year: Optional[int] = Query(None, ge=2000, le=2100),
    month: Optional[int] = Query(None, ge=1, le=12),
    repo: TransactionRepository = Depends(get_transaction_repository),
    user: CurrentUser = Depends(get_current_user),
):
    return success(monthly_report(repo, user, year, month))


@router.get("/customers")
def customers(
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    customer_repo: CustomerRepository = Depends(get_customer_repository),
    user: CurrentUser = Depends(get_current_user),
):
    return success(customers_report(customer_repo, user, start_date, end_date))


@router.get("/{report_type}")
def unknown_report(report_type: str, user: CurrentUser = Depends(get_current_user)):
    raise EntityNotFoundException("Report type not found")
