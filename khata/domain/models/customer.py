"""Customer domain model — maps to the 'customers' table."""

from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey, Text, UniqueConstraint
from sqlalchemy.sql import func

from khata.infrastructure.database import Base


class Customer(Base):
    __tablename__ = "customers"
    __table_args__ = (
        # Phone numbers are unique per owner, not globally
        UniqueConstraint("user_id", "phone", name="uq_customers_user_phone"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False, index=True)
    phone = Column(String(20), nullable=False)
    email = Column(String(255), nullable=True)
    address = Column(Text, nullable=True)
    category = Column(String(50), nullable=True)
    credit_limit = Column(Numeric(12, 2, asdecimal=False), nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Customer {self.id} - {self.name}>"
