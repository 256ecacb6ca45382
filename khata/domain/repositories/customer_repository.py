"""
Customer Repository Interface.
Defines owner-scoped data access operations for Customers.
"""

from datetime import date
from typing import Any, Dict, List, Optional

from khata.domain.models.customer import Customer
from khata.domain.repositories.base import BaseRepository
from khata.domain.schemas.customer import CustomerFilter


class CustomerRepository(BaseRepository[Customer]):
    """Interface for Customer-specific operations."""

    def get_for_owner(self, customer_id: int, user_id: int) -> Optional[Customer]:
        ...

    def list_for_owner(self, user_id: int, filters: CustomerFilter) -> List[Customer]:
        """Page of customers ordered by name, optionally searched."""
        ...

    def list_with_balance(self, user_id: int, filters: CustomerFilter) -> List[Dict[str, Any]]:
        """Same page as ``list_for_owner`` with each customer's balance attached."""
        ...

    def count_for_owner(self, user_id: int, filters: CustomerFilter) -> int:
        ...

    def phone_exists(self, phone: str, user_id: int, exclude_id: Optional[int] = None) -> bool:
        ...

    def update_for_owner(self, customer_id: int, user_id: int, values: Dict[str, Any]) -> int:
        ...

    def delete_for_owner(self, customer_id: int, user_id: int) -> int:
        """Delete the customer and its transactions."""
        ...

    def get_balance(self, customer_id: int, user_id: int) -> float:
        ...

    def balance_breakdown(
        self, user_id: int, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> List[Dict[str, Any]]:
        """Credit, debit, balance and entry count per customer."""
        ...
