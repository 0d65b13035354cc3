from sqlalchemy import Column, Integer, DateTime, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship

from agent_tracker.database import Base, utc_now


class MonthlyGoal(Base):
    """Target count for one activity in one calendar month."""

    __tablename__ = "monthly_goals"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    activity_id = Column(Integer, ForeignKey("activities_master.id", ondelete="CASCADE"), nullable=False)
    year = Column(Integer, nullable=False)
    month = Column(Integer, nullable=False)
    goal_value = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=utc_now)
    updated_at = Column(DateTime, nullable=False, default=utc_now)

    __table_args__ = (
        UniqueConstraint("user_id", "activity_id", "year", "month", name="uq_monthly_goals_user_activity_period"),
        Index("ix_monthly_goals_user_period", "user_id", "year", "month"),
    )

    user = relationship("User", back_populates="monthly_goals")
    activity = relationship("ActivityDefinition", back_populates="monthly_goals")

    def to_dict(self):
        data = {
            "id": self.id,
            "user_id": self.user_id,
            "activity_id": self.activity_id,
            "year": self.year,
            "month": self.month,
            "goal_value": self.goal_value,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }
        if self.activity is not None:
            data["activity_name"] = self.activity.name
            data["category"] = self.activity.category
        return data

    def __repr__(self):
        return f"<MonthlyGoal user={self.user_id} activity={self.activity_id} {self.year}-{self.month:02d}>"
