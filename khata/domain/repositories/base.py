"""
Base Repository Interface.
Defines the standard contract for data access operations.
"""

from typing import Any, Dict, List, Optional, Protocol, TypeVar

T = TypeVar("T")


class BaseRepository(Protocol[T]):
    """Interface for generic CRUD primitives.

    ``*where`` arguments are SQLAlchemy boolean expressions; values are always
    bound as parameters.
    """

    def create(self, values: Dict[str, Any]) -> T:
        """Insert a row from a column -> value map and return it."""
        ...

    def get_one(self, *where: Any) -> Optional[T]:
        """First row matching every criterion, or None."""
        ...

    def get_all(self, *where: Any, order_by: Any = None, offset: int = 0, limit: Optional[int] = None) -> List[T]:
        """All rows matching every criterion."""
        ...

    def update_where(self, values: Dict[str, Any], *where: Any) -> int:
        """Apply ``values`` to matching rows; returns the affected row count."""
        ...

    def delete_where(self, *where: Any) -> int:
        """Delete matching rows; returns the affected row count."""
        ...

    def count(self, *where: Any) -> int:
        ...

    def exists(self, *where: Any) -> bool:
        ...
