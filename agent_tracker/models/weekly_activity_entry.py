"""
Weekly Activity Entries Model

Stores how many times an agent performed an activity in a given week.
Entries are keyed by (user, activity, week_start_date); re-submitting a
week overwrites count_value and refreshes entry_date.
"""

from sqlalchemy import Column, Integer, Date, DateTime, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship

from agent_tracker.database import Base, utc_now


class WeeklyActivityEntry(Base):
    __tablename__ = "weekly_activities"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    activity_id = Column(Integer, ForeignKey("activities_master.id", ondelete="CASCADE"), nullable=False)
    week_start_date = Column(Date, nullable=False)
    week_end_date = Column(Date, nullable=False)
    count_value = Column(Integer, nullable=False, default=0)
    entry_date = Column(DateTime, nullable=False, default=utc_now)  # last submission
    created_at = Column(DateTime, nullable=False, default=utc_now)

    __table_args__ = (
        UniqueConstraint("user_id", "activity_id", "week_start_date", name="uq_weekly_activities_user_activity_week"),
        Index("ix_weekly_activities_user_week", "user_id", "week_start_date"),
    )

    user = relationship("User", back_populates="weekly_entries")
    activity = relationship("ActivityDefinition", back_populates="weekly_entries")

    def to_dict(self):
        data = {
            "id": self.id,
            "user_id": self.user_id,
            "activity_id": self.activity_id,
            "week_start_date": self.week_start_date,
            "week_end_date": self.week_end_date,
            "count_value": self.count_value,
            "entry_date": self.entry_date,
            "created_at": self.created_at,
        }
        if self.activity is not None:
            data["activity_name"] = self.activity.name
            data["category"] = self.activity.category
        return data

    def __repr__(self):
        return f"<WeeklyActivityEntry user={self.user_id} activity={self.activity_id} week={self.week_start_date}>"
