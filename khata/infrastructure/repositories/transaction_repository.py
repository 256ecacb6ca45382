"""
SQLAlchemy Implementation of Transaction Repository.
"""

from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple

import pytz
from sqlalchemy import case, extract, func, or_
from sqlalchemy.orm import Query

from khata.config import get_settings
from khata.domain.models.customer import Customer
from khata.domain.models.transaction import CREDIT, DEBIT, Transaction
from khata.domain.repositories.transaction_repository import TransactionRepository
from khata.domain.schemas.transaction import TransactionFilter
from khata.infrastructure.repositories.base_repository import LIKE_ESCAPE, SQLAlchemyRepository, contains_pattern
from khata.infrastructure.repositories.customer_repository import SIGNED_AMOUNT

settings = get_settings()
tz = pytz.timezone(settings.TIMEZONE)

# Newest first; id breaks ties between rows created in the same second
LEDGER_ORDER = (Transaction.date.desc(), Transaction.created_at.desc(), Transaction.id.desc())


class SQLAlchemyTransactionRepository(SQLAlchemyRepository[Transaction], TransactionRepository):
    """Transaction repository implementation using SQLAlchemy."""

    def get_current_date(self) -> date:
        """Get current date in the configured timezone."""
        return datetime.now(tz).date()

    def _with_customer(self, *columns: Any) -> Query:
        entities = columns or (Transaction, Customer.name.label("customer_name"))
        return (
            self.db.query(*entities)
            .select_from(Transaction)
            .join(Customer, Customer.id == Transaction.customer_id)
        )

    def _criteria(self, user_id: int, filters: TransactionFilter) -> list:
        criteria = [Transaction.user_id == user_id]
        if filters.customer_id is not None:
            criteria.append(Transaction.customer_id == filters.customer_id)
        if filters.type:
            criteria.append(Transaction.type == filters.type.value)
        if filters.start_date:
            criteria.append(Transaction.date >= filters.start_date)
        if filters.end_date:
            criteria.append(Transaction.date <= filters.end_date)
        if filters.search:
            term = contains_pattern(filters.search)
            criteria.append(or_(
                Transaction.description.ilike(term, escape=LIKE_ESCAPE),
                Customer.name.ilike(term, escape=LIKE_ESCAPE),
            ))
        return criteria

    def get_for_owner(self, transaction_id: int, user_id: int) -> Optional[Tuple[Transaction, str]]:
        with self.guard():
            return (
                self._with_customer()
                .filter(Transaction.id == transaction_id, Transaction.user_id == user_id)
                .first()
            )

    def list_for_owner(self, user_id: int, filters: TransactionFilter) -> List[Tuple[Transaction, str]]:
        with self.guard():
            return (
                self._with_customer()
                .filter(*self._criteria(user_id, filters))
                .order_by(*LEDGER_ORDER)
                .offset(filters.offset)
                .limit(filters.limit)
                .all()
            )

    def count_for_owner(self, user_id: int, filters: TransactionFilter) -> int:
        with self.guard():
            return (
                self._with_customer(func.count(Transaction.id))
                .filter(*self._criteria(user_id, filters))
                .scalar()
            ) or 0

    def update_for_owner(self, transaction_id: int, user_id: int, values: Dict[str, Any]) -> int:
        return self.update_where(values, Transaction.id == transaction_id, Transaction.user_id == user_id)

    def delete_for_owner(self, transaction_id: int, user_id: int) -> int:
        return self.delete_where(Transaction.id == transaction_id, Transaction.user_id == user_id)

    def get_balance(self, user_id: int, customer_id: Optional[int] = None) -> float:
        with self.guard():
            query = self.db.query(func.coalesce(func.sum(SIGNED_AMOUNT), 0)).filter(Transaction.user_id == user_id)
            if customer_id is not None:
                query = query.filter(Transaction.customer_id == customer_id)
            balance = query.scalar()
        return float(balance or 0)

    def get_summary(
        self,
        user_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        customer_id: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        with self.guard():
            query = self.db.query(
                Transaction.type,
                func.count(Transaction.id).label("count"),
                func.coalesce(func.sum(Transaction.amount), 0).label("total_amount"),
            ).filter(Transaction.user_id == user_id)
            if customer_id is not None:
                query = query.filter(Transaction.customer_id == customer_id)
            if start_date:
                query = query.filter(Transaction.date >= start_date)
            if end_date:
                query = query.filter(Transaction.date <= end_date)
            rows = query.group_by(Transaction.type).order_by(Transaction.type).all()
        return [
            {"type": r.type, "count": r.count, "total_amount": float(r.total_amount or 0)}
            for r in rows
        ]

    def get_monthly(self, user_id: int, year: Optional[int] = None, month: Optional[int] = None) -> List[Dict[str, Any]]:
        """Credit/debit totals per calendar month.

        With neither ``year`` nor ``month`` the window is the last twelve months
        including the current one. ``month`` alone means that month this year.
        """
        txn_year = extract("year", Transaction.date)
        txn_month = extract("month", Transaction.date)

        with self.guard():
            query = self.db.query(
                txn_year.label("year"),
                txn_month.label("month"),
                func.coalesce(func.sum(case((Transaction.type == CREDIT, Transaction.amount), else_=0)), 0).label("total_credit"),
                func.coalesce(func.sum(case((Transaction.type == DEBIT, Transaction.amount), else_=0)), 0).label("total_debit"),
                func.coalesce(func.sum(SIGNED_AMOUNT), 0).label("balance"),
            ).filter(Transaction.user_id == user_id)

            if month and not year:
                year = self.get_current_date().year
            if year:
                query = query.filter(txn_year == year)
                if month:
                    query = query.filter(txn_month == month)
            else:
                today = self.get_current_date()
                start_month = today.month - 11
                start_year = today.year
                if start_month < 1:
                    start_month += 12
                    start_year -= 1
                query = query.filter(Transaction.date >= date(start_year, start_month, 1))

            rows = (
                query.group_by(txn_year, txn_month)
                .order_by(txn_year.desc(), txn_month.desc())
                .all()
            )

        return [
            {
                "month": f"{int(r.year):04d}-{int(r.month):02d}",
                "total_credit": float(r.total_credit or 0),
                "total_debit": float(r.total_debit or 0),
                "balance": float(r.balance or 0),
            }
            for r in rows
        ]

    def latest(self, user_id: int, limit: int = 5) -> List[Tuple[Transaction, str]]:
        with self.guard():
            return (
                self._with_customer()
                .filter(Transaction.user_id == user_id)
                .order_by(*LEDGER_ORDER)
                .limit(limit)
                .all()
            )
