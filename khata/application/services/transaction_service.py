"""Ledger entries (credit/debit transactions), always scoped to the calling user."""

from typing import Any, Dict, Tuple

import structlog

from khata.core.exceptions import EntityNotFoundException
from khata.core.responses import paginated
from khata.domain.models.transaction import Transaction
from khata.domain.repositories.customer_repository import CustomerRepository
from khata.domain.repositories.transaction_repository import TransactionRepository
from khata.domain.schemas.auth import CurrentUser
from khata.domain.schemas.transaction import (
    TransactionCreate,
    TransactionFilter,
    TransactionRead,
    TransactionUpdate,
)

logger = structlog.get_logger(__name__)

NOT_FOUND = "Transaction not found"
CUSTOMER_NOT_FOUND = "Customer not found"


def to_read(row: Tuple[Transaction, str]) -> TransactionRead:
    transaction, customer_name = row
    return TransactionRead.model_validate(transaction).model_copy(update={"customer_name": customer_name})


def _ensure_customer(customer_repo: CustomerRepository, current: CurrentUser, customer_id: int) -> None:
    if customer_repo.get_for_owner(customer_id, current.user_id) is None:
        raise EntityNotFoundException(CUSTOMER_NOT_FOUND)


def _column_values(values: Dict[str, Any]) -> Dict[str, Any]:
    if values.get("type") is not None:
        values["type"] = values["type"].value
    return values


def list_transactions(repo: TransactionRepository, current: CurrentUser, filters: TransactionFilter) -> Dict[str, Any]:
    items = [to_read(row) for row in repo.list_for_owner(current.user_id, filters)]
    total = repo.count_for_owner(current.user_id, filters)
    return paginated(items, total, filters.page, filters.limit)


def get_transaction(repo: TransactionRepository, current: CurrentUser, transaction_id: int) -> TransactionRead:
    row = repo.get_for_owner(transaction_id, current.user_id)
    if row is None:
        raise EntityNotFoundException(NOT_FOUND)
    return to_read(row)


def create_transaction(
    repo: TransactionRepository,
    customer_repo: CustomerRepository,
    current: CurrentUser,
    body: TransactionCreate,
) -> TransactionRead:
    _ensure_customer(customer_repo, current, body.customer_id)

    values = _column_values(body.model_dump())
    values["user_id"] = current.user_id
    if values["date"] is None:
        values["date"] = repo.get_current_date()

    transaction = repo.create(values)
    logger.info(
        "Transaction recorded",
        user_id=current.user_id,
        transaction_id=transaction.id,
        customer_id=transaction.customer_id,
        type=transaction.type,
    )
    return get_transaction(repo, current, transaction.id)


def update_transaction(
    repo: TransactionRepository,
    customer_repo: CustomerRepository,
    current: CurrentUser,
    transaction_id: int,
    body: TransactionUpdate,
) -> TransactionRead:
    values = _column_values(body.model_dump(exclude_unset=True))
    # An explicit null date leaves the stored date alone
    if "date" in values and values["date"] is None:
        del values["date"]

    if "customer_id" in values:
        _ensure_customer(customer_repo, current, values["customer_id"])

    if values:
        if not repo.update_for_owner(transaction_id, current.user_id, values):
            raise EntityNotFoundException(NOT_FOUND)
        logger.info("Transaction updated", user_id=current.user_id, transaction_id=transaction_id, fields=sorted(values))

    return get_transaction(repo, current, transaction_id)


def delete_transaction(repo: TransactionRepository, current: CurrentUser, transaction_id: int) -> None:
    if not repo.delete_for_owner(transaction_id, current.user_id):
        raise EntityNotFoundException(NOT_FOUND)
    logger.info("Transaction deleted", user_id=current.user_id, transaction_id=transaction_id)
