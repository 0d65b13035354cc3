"""
Gross Commission Goal Model

One annual commission target per user per year. Quarterly and monthly
targets are derived from annual_target on every read (see
services.periods.derive_targets) and are never stored.
"""

from decimal import Decimal

from sqlalchemy import Column, Integer, Numeric, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from agent_tracker.database import Base, utc_now


class GrossCommissionGoal(Base):
    __tablename__ = "gross_commission_goals"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    year = Column(Integer, nullable=False)
    annual_target = Column(Numeric(12, 2), nullable=False, default=Decimal("0"))
    created_at = Column(DateTime, nullable=False, default=utc_now)
    updated_at = Column(DateTime, nullable=False, default=utc_now)

    __table_args__ = (
        UniqueConstraint("user_id", "year", name="uq_gross_commission_goals_user_year"),
    )

    user = relationship("User", back_populates="commission_goals")

    def __repr__(self):
        return f"<GrossCommissionGoal user={self.user_id} {self.year}: {self.annual_target}>"
