"""
User Repository Interface.
"""

from typing import Any, Dict, Optional

from khata.domain.models.user import User
from khata.domain.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Interface for User-specific operations. Inactive users are invisible."""

    def get_by_id(self, user_id: int) -> Optional[User]:
        ...

    def get_by_email(self, email: str) -> Optional[User]:
        ...

    def email_exists(self, email: str, exclude_id: Optional[int] = None) -> bool:
        ...

    def phone_exists(self, phone: str, exclude_id: Optional[int] = None) -> bool:
        ...

    def update(self, user_id: int, values: Dict[str, Any]) -> int:
        ...

    def deactivate(self, user_id: int) -> int:
        """Soft delete: flips ``is_active`` off."""
        ...
