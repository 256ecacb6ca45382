"""
SQLAlchemy Implementation of User Repository.
"""

from typing import Any, Dict, Optional

from khata.domain.models.user import User
from khata.domain.repositories.user_repository import UserRepository
from khata.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyUserRepository(SQLAlchemyRepository[User], UserRepository):
    """User repository implementation using SQLAlchemy."""

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.get_one(User.id == user_id, User.is_active.is_(True))

    def get_by_email(self, email: str) -> Optional[User]:
        return self.get_one(User.email == email, User.is_active.is_(True))

    def email_exists(self, email: str, exclude_id: Optional[int] = None) -> bool:
        criteria = [User.email == email, User.is_active.is_(True)]
        if exclude_id:
            criteria.append(User.id != exclude_id)
        return self.exists(*criteria)

    def phone_exists(self, phone: str, exclude_id: Optional[int] = None) -> bool:
        criteria = [User.phone == phone, User.is_active.is_(True)]
        if exclude_id:
            criteria.append(User.id != exclude_id)
        return self.exists(*criteria)

    def update(self, user_id: int, values: Dict[str, Any]) -> int:
        return self.update_where(values, User.id == user_id, User.is_active.is_(True))

    def deactivate(self, user_id: int) -> int:
        return self.update_where({"is_active": False}, User.id == user_id, User.is_active.is_(True))
