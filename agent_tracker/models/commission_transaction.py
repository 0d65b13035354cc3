from sqlalchemy import Column, Integer, Numeric, String, Text, DateTime, ForeignKey, Index, CheckConstraint
from sqlalchemy.orm import relationship

from agent_tracker.database import Base, utc_now


class CommissionTransaction(Base):
    """A commission earned on a sale or rental. Append-only."""

    __tablename__ = "commission_transactions"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    transaction_type = Column(String(20), nullable=False)  # sale | rental
    transaction_reference = Column(String(255), nullable=True)
    transaction_month = Column(Integer, nullable=False)
    transaction_year = Column(Integer, nullable=False)
    property_address = Column(Text, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=utc_now)

    __table_args__ = (
        CheckConstraint("transaction_type IN ('sale', 'rental')", name="ck_commission_transactions_type"),
        Index("ix_commission_transactions_user_period", "user_id", "transaction_year", "transaction_month"),
    )

    user = relationship("User", back_populates="commission_transactions")

    TRANSACTION_TYPES = ["sale", "rental"]

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "amount": self.amount,
            "transaction_type": self.transaction_type,
            "transaction_reference": self.transaction_reference,
            "transaction_month": self.transaction_month,
            "transaction_year": self.transaction_year,
            "property_address": self.property_address,
            "notes": self.notes,
            "created_at": self.created_at,
        }

    def __repr__(self):
        return f"<CommissionTransaction {self.transaction_type} {self.amount} ({self.transaction_year}-{self.transaction_month:02d})>"
