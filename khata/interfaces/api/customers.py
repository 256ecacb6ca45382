"""Customer API routes — owner-scoped CRUD with search and pagination."""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from khata.application.services.customer_service import (
    create_customer,
    delete_customer,
    get_customer,
    list_customers,
    update_customer,
)
from khata.config import get_settings
from khata.core.responses import success
from khata.domain.repositories.customer_repository import CustomerRepository
from khata.domain.schemas.auth import CurrentUser
from khata.domain.schemas.customer import CustomerCreate, CustomerFilter, CustomerUpdate
from khata.interfaces.api.deps import get_current_user
from khata.interfaces.deps import get_customer_repository

settings = get_settings()
router = APIRouter(prefix="/api/customers", tags=["Customers"])


@router.get("")
def list_all(
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1),
    search: Optional[str] = None,
    with_balance: bool = False,
    repo: CustomerRepository = Depends(get_customer_repository),
    user: CurrentUser = Depends(get_current_user),
):
    """List customers ordered by name; ``limit`` is capped at MAX_PAGE_SIZE."""
    filters = CustomerFilter(
        page=page,
        limit=min(limit, settings.MAX_PAGE_SIZE),
        search=search.strip() if search else None,
        with_balance=with_balance,
    )
    return success(list_customers(repo, user, filters))


@router.post("", status_code=status.HTTP_201_CREATED)
def create(
    body: CustomerCreate,
    repo: CustomerRepository = Depends(get_customer_repository),
    user: CurrentUser = Depends(get_current_user),
):
    return success(create_customer(repo, user, body), "Customer created successfully")


@router.get("/{customer_id}")
def read(
    customer_id: int,
    repo: CustomerRepository = Depends(get_customer_repository),
    user: CurrentUser = Depends(get_current_user),
):
    return success(get_customer(repo, user, customer_id))


@router.put("/{customer_id}")
def update(
    customer_id: int,
    body: CustomerUpdate,
    repo: CustomerRepository = Depends(get_customer_repository),
    user: CurrentUser = Depends(get_current_user),
):
    return success(update_customer(repo, user, customer_id, body), "Customer updated successfully")


@router.delete("/{customer_id}")
def delete(
    customer_id: int,
    repo: CustomerRepository = Depends(get_customer_repository),
    user: CurrentUser = Depends(get_current_user),
):
    delete_customer(repo, user, customer_id)
    return success(message="Customer deleted successfully")
