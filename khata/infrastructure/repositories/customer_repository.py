"""
SQLAlchemy Implementation of Customer Repository.
"""

from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy import and_, case, func, or_

from khata.domain.models.customer import Customer
from khata.domain.models.transaction import CREDIT, DEBIT, Transaction
from khata.domain.repositories.customer_repository import CustomerRepository
from khata.domain.schemas.customer import CustomerFilter
from khata.infrastructure.repositories.base_repository import LIKE_ESCAPE, SQLAlchemyRepository, contains_pattern

# Credits add to the balance, debits subtract
SIGNED_AMOUNT = case((Transaction.type == CREDIT, Transaction.amount), else_=-Transaction.amount)


class SQLAlchemyCustomerRepository(SQLAlchemyRepository[Customer], CustomerRepository):
    """Customer repository implementation using SQLAlchemy."""

    def _criteria(self, user_id: int, filters: Optional[CustomerFilter] = None) -> list:
        criteria = [Customer.user_id == user_id]
        if filters is not None and filters.search:
            term = contains_pattern(filters.search)
            criteria.append(or_(
                Customer.name.ilike(term, escape=LIKE_ESCAPE),
                Customer.phone.ilike(term, escape=LIKE_ESCAPE),
                Customer.email.ilike(term, escape=LIKE_ESCAPE),
            ))
        return criteria

    def get_for_owner(self, customer_id: int, user_id: int) -> Optional[Customer]:
        return self.get_one(Customer.id == customer_id, Customer.user_id == user_id)

    def list_for_owner(self, user_id: int, filters: CustomerFilter) -> List[Customer]:
        return self.get_all(
            *self._criteria(user_id, filters),
            order_by=(Customer.name.asc(), Customer.id.asc()),
            offset=filters.offset,
            limit=filters.limit,
        )

    def list_with_balance(self, user_id: int, filters: CustomerFilter) -> List[Dict[str, Any]]:
        with self.guard():
            rows = (
                self.db.query(Customer, func.coalesce(func.sum(SIGNED_AMOUNT), 0).label("balance"))
                .outerjoin(
                    Transaction,
                    and_(Transaction.customer_id == Customer.id, Transaction.user_id == Customer.user_id),
                )
                .filter(*self._criteria(user_id, filters))
                .group_by(Customer.id)
                .order_by(Customer.name.asc(), Customer.id.asc())
                .offset(filters.offset)
                .limit(filters.limit)
                .all()
            )
        return [{"customer": customer, "balance": float(balance or 0)} for customer, balance in rows]

    def count_for_owner(self, user_id: int, filters: CustomerFilter) -> int:
        return self.count(*self._criteria(user_id, filters))

    def phone_exists(self, phone: str, user_id: int, exclude_id: Optional[int] = None) -> bool:
        criteria = [Customer.phone == phone, Customer.user_id == user_id]
        if exclude_id:
            criteria.append(Customer.id != exclude_id)
        return self.exists(*criteria)

    def update_for_owner(self, customer_id: int, user_id: int, values: Dict[str, Any]) -> int:
        return self.update_where(values, Customer.id == customer_id, Customer.user_id == user_id)

    def delete_for_owner(self, customer_id: int, user_id: int) -> int:
        with self.guard():
            self.db.query(Transaction).filter(
                Transaction.customer_id == customer_id,
                Transaction.user_id == user_id,
            ).delete(synchronize_session=False)
            affected = (
                self.db.query(Customer)
                .filter(Customer.id == customer_id, Customer.user_id == user_id)
                .delete(synchronize_session=False)
            )
            if affected:
                self.db.commit()
            else:
                self.db.rollback()
            return affected

    def get_balance(self, customer_id: int, user_id: int) -> float:
        with self.guard():
            balance = (
                self.db.query(func.coalesce(func.sum(SIGNED_AMOUNT), 0))
                .filter(Transaction.customer_id == customer_id, Transaction.user_id == user_id)
                .scalar()
            )
        return float(balance or 0)

    def balance_breakdown(
        self, user_id: int, start_date: Optional[date] = None, end_date: Optional[date] = None
    ) -> List[Dict[str, Any]]:
        # Date bounds sit in the join so customers without entries still show up
        join_on = [Transaction.customer_id == Customer.id, Transaction.user_id == user_id]
        if start_date:
            join_on.append(Transaction.date >= start_date)
        if end_date:
            join_on.append(Transaction.date <= end_date)

        balance = func.coalesce(func.sum(SIGNED_AMOUNT), 0)
        with self.guard():
            rows = (
                self.db.query(
                    Customer.id.label("customer_id"),
                    Customer.name.label("customer_name"),
                    func.coalesce(func.sum(case((Transaction.type == CREDIT, Transaction.amount), else_=0)), 0).label("total_credit"),
                    func.coalesce(func.sum(case((Transaction.type == DEBIT, Transaction.amount), else_=0)), 0).label("total_debit"),
                    balance.label("balance"),
                    func.count(Transaction.id).label("transaction_count"),
                )
                .outerjoin(Transaction, and_(*join_on))
                .filter(Customer.user_id == user_id)
                .group_by(Customer.id, Customer.name)
                .order_by(balance.desc(), Customer.name.asc())
                .all()
            )
        return [
            {
                "customer_id": r.customer_id,
                "customer_name": r.customer_name,
                "total_credit": float(r.total_credit or 0),
                "total_debit": float(r.total_debit or 0),
                "balance": float(r.balance or 0),
                "transaction_count": r.transaction_count,
            }
            for r in rows
        ]
