"""
Transaction Repository Interface.
Defines owner-scoped ledger queries and aggregates.
"""

from datetime import date
from typing import Any, Dict, List, Optional, Tuple

from khata.domain.models.transaction import Transaction
from khata.domain.repositories.base import BaseRepository
from khata.domain.schemas.transaction import TransactionFilter


class TransactionRepository(BaseRepository[Transaction]):
    """Interface for Transaction-specific operations."""

    def get_current_date(self) -> date:
        """Today in the configured timezone; the default entry date."""
        ...

    def get_for_owner(self, transaction_id: int, user_id: int) -> Optional[Tuple[Transaction, str]]:
        """The transaction and its customer's name."""
        ...

    def list_for_owner(self, user_id: int, filters: TransactionFilter) -> List[Tuple[Transaction, str]]:
        ...

    def count_for_owner(self, user_id: int, filters: TransactionFilter) -> int:
        ...

    def update_for_owner(self, transaction_id: int, user_id: int, values: Dict[str, Any]) -> int:
        ...

    def delete_for_owner(self, transaction_id: int, user_id: int) -> int:
        ...

    def get_balance(self, user_id: int, customer_id: Optional[int] = None) -> float:
        ...

    def get_summary(
        self,
        user_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        customer_id: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """One row per transaction type: ``{type, count, total_amount}``."""
        ...

    def get_monthly(self, user_id: int, year: Optional[int] = None, month: Optional[int] = None) -> List[Dict[str, Any]]:
        ...

    def latest(self, user_id: int, limit: int = 5) -> List[Tuple[Transaction, str]]:
        ...
