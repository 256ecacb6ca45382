"""Owner-scoped customer CRUD."""

from typing import Any, Dict

import structlog

from khata.core.exceptions import ConflictException, DuplicateEntryError, EntityNotFoundException
from khata.core.responses import paginated
from khata.domain.repositories.customer_repository import CustomerRepository
from khata.domain.schemas.auth import CurrentUser
from khata.domain.schemas.customer import CustomerCreate, CustomerFilter, CustomerRead, CustomerUpdate

logger = structlog.get_logger(__name__)

DUPLICATE_PHONE = "Customer with this phone number already exists"
NOT_FOUND = "Customer not found"


def list_customers(repo: CustomerRepository, current: CurrentUser, filters: CustomerFilter) -> Dict[str, Any]:
    """Page of the caller's customers, optionally with running balances."""
    if filters.with_balance:
        rows = repo.list_with_balance(current.user_id, filters)
        items = [
            CustomerRead.model_validate(row["customer"]).model_copy(update={"balance": row["balance"]})
            for row in rows
        ]
    else:
        items = [CustomerRead.model_validate(c) for c in repo.list_for_owner(current.user_id, filters)]

    total = repo.count_for_owner(current.user_id, filters)
    return paginated(items, total, filters.page, filters.limit)


def get_customer(repo: CustomerRepository, current: CurrentUser, customer_id: int) -> CustomerRead:
    customer = repo.get_for_owner(customer_id, current.user_id)
    if customer is None:
        raise EntityNotFoundException(NOT_FOUND)
    balance = repo.get_balance(customer_id, current.user_id)
    return CustomerRead.model_validate(customer).model_copy(update={"balance": balance})


def create_customer(repo: CustomerRepository, current: CurrentUser, body: CustomerCreate) -> CustomerRead:
    if repo.phone_exists(body.phone, current.user_id):
        raise ConflictException(DUPLICATE_PHONE)

    values = body.model_dump()
    values["user_id"] = current.user_id
    try:
        customer = repo.create(values)
    except DuplicateEntryError:
        raise ConflictException(DUPLICATE_PHONE)

    logger.info("Customer created", user_id=current.user_id, customer_id=customer.id)
    return CustomerRead.model_validate(customer).model_copy(update={"balance": 0.0})


def update_customer(
    repo: CustomerRepository, current: CurrentUser, customer_id: int, body: CustomerUpdate
) -> CustomerRead:
    values = body.model_dump(exclude_unset=True)

    if "phone" in values and repo.phone_exists(values["phone"], current.user_id, exclude_id=customer_id):
        raise ConflictException(DUPLICATE_PHONE)

    if values:
        try:
            updated = repo.update_for_owner(customer_id, current.user_id, values)
        except DuplicateEntryError:
            raise ConflictException(DUPLICATE_PHONE)
        if not updated:
            raise EntityNotFoundException(NOT_FOUND)
        logger.info("Customer updated", user_id=current.user_id, customer_id=customer_id, fields=sorted(values))

    return get_customer(repo, current, customer_id)


def delete_customer(repo: CustomerRepository, current: CurrentUser, customer_id: int) -> None:
    if not repo.delete_for_owner(customer_id, current.user_id):
        raise EntityNotFoundException(NOT_FOUND)
    logger.info("Customer deleted", user_id=current.user_id, customer_id=customer_id)
