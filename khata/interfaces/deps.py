"""
API Dependencies.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from khata.domain.models.customer import Customer
from khata.domain.models.transaction import Transaction
from khata.domain.models.user import User
from khata.domain.repositories.customer_repository import CustomerRepository
from khata.domain.repositories.transaction_repository import TransactionRepository
from khata.domain.repositories.user_repository import UserRepository
from khata.infrastructure.database import get_db
from khata.infrastructure.repositories.customer_repository import SQLAlchemyCustomerRepository
from khata.infrastructure.repositories.transaction_repository import SQLAlchemyTransactionRepository
from khata.infrastructure.repositories.user_repository import SQLAlchemyUserRepository


def get_user_repository(db: Session = Depends(get_db)) -> UserRepository:
    """Get user repository instance."""
    return SQLAlchemyUserRepository(db, User)


def get_customer_repository(db: Session = Depends(get_db)) -> CustomerRepository:
    """Get customer repository instance."""
    return SQLAlchemyCustomerRepository(db, Customer)


def get_transaction_repository(db: Session = Depends(get_db)) -> TransactionRepository:
    """Get transaction repository instance."""
    return SQLAlchemyTransactionRepository(db, Transaction)
