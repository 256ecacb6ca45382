"""Transaction API routes — owner-scoped ledger entries with filters."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from khata.application.services.transaction_service import (
    create_transaction,
    delete_transaction,
    get_transaction,
    list_transactions,
    update_transaction,
)
from khata.config import get_settings
from khata.core.responses import success
from khata.domain.repositories.customer_repository import CustomerRepository
from khata.domain.repositories.transaction_repository import TransactionRepository
from khata.domain.schemas.auth import CurrentUser
from khata.domain.schemas.transaction import (
    TransactionCreate,
    TransactionFilter,
    TransactionType,
    TransactionUpdate,
)
from khata.interfaces.api.deps import get_current_user
from khata.interfaces.deps import get_customer_repository, get_transaction_repository

settings = get_settings()
router = APIRouter(prefix="/api/transactions", tags=["Transactions"])


@router.get("")
def list_all(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    customer_id: Optional[int] = None,
    type: Optional[TransactionType] = None,
    start_date: Optional[date] = None,
    end_date: Optional[date] = None,
    search: Optional[str] = None,
    repo: TransactionRepository = Depends(get_transaction_repository),
    user: CurrentUser = Depends(get_current_user),
):
    """List ledger entries, newest first."""
    filters = TransactionFilter(
        page=page,
        limit=min(limit, settings.MAX_PAGE_SIZE),
        customer_id=customer_id,
        type=type,
        start_date=start_date,
        end_date=end_date,
        search=search.strip() if search else None,
    )
    return success(list_transactions(repo, user, filters))


@router.post("", status_code=status.HTTP_201_CREATED)
def create(
    body: TransactionCreate,
    repo: TransactionRepository = Depends(get_transaction_repository),
    customer_repo: CustomerRepository = Depends(get_customer_repository),
    user: CurrentUser = Depends(get_current_user),
):
    return success(create_transaction(repo, customer_repo, user, body), "Transaction created successfully")


@router.get("/{transaction_id}")
def read(
    transaction_id: int,
    repo: TransactionRepository = Depends(get_transaction_repository),
    user: CurrentUser = Depends(get_current_user),
):
    return success(get_transaction(repo, user, transaction_id))


@router.put("/{transaction_id}")
def update(
    transaction_id: int,
    body: TransactionUpdate,
    repo: TransactionRepository = Depends(get_transaction_repository),
    customer_repo: CustomerRepository = Depends(get_customer_repository),
    user: CurrentUser = Depends(get_current_user),
):
    return success(
        update_transaction(repo, customer_repo, user, transaction_id, body),
        "Transaction updated successfully",
    )


@router.delete("/{transaction_id}")
def delete(
    transaction_id: int,
    repo: TransactionRepository = Depends(get_transaction_repository),
    user: CurrentUser = Depends(get_current_user),
):
    delete_transaction(repo, user, transaction_id)
    return success(message="Transaction deleted successfully")
