"""Transaction domain model — maps to the 'transactions' table."""

from sqlalchemy import CheckConstraint, Column, Integer, String, Numeric, Date, DateTime, Enum, ForeignKey, Text
from sqlalchemy.sql import func

from khata.infrastructure.database import Base

CREDIT = "credit"
DEBIT = "debit"


class Transaction(Base):
    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_transactions_amount_non_negative"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    customer_id = Column(Integer, ForeignKey("customers.id", ondelete="CASCADE"), nullable=False, index=True)
    type = Column(Enum(CREDIT, DEBIT, name="transaction_type"), nullable=False, index=True)
    amount = Column(Numeric(12, 2, asdecimal=False), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String(50), nullable=True)
    date = Column(Date, nullable=False, index=True)
    image_url = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Transaction {self.id} {self.type} {self.amount}>"
