from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.orm import relationship

from agent_tracker.database import Base, utc_now


class ActivityDefinition(Base):
    """An entry in the office's sales-activity catalog."""

    __tablename__ = "activities_master"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), unique=True, nullable=False)
    category = Column(String(100), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=utc_now)

    monthly_goals = relationship(
        "MonthlyGoal", back_populates="activity", cascade="all, delete-orphan", passive_deletes=True
    )
    weekly_entries = relationship(
        "WeeklyActivityEntry", back_populates="activity", cascade="all, delete-orphan", passive_deletes=True
    )

    # Catalog seeded at first run, grouped by category
    DEFAULT_CATALOG = [
        ("Tele-canvassing", "Cold Calling"),
        ("Door Knocks", "Cold Calling"),
        ("360 Activity Drops", "Cold Calling"),
        ("Neighbourhood Drops", "Branding"),
        ("Promotional Items Distributed", "Branding"),
        ("Robot Blitz", "Branding"),
        ("Community Events", "Branding"),
        ("Rally Participation", "Branding"),
        ("Social Media Postings", "Branding"),
        ("Contacts Loaded", "CRM"),
        ("Ongoing Touchpoints", "CRM"),
        ("Valuations", "Sales & Rental"),
        ("Sole Mandates", "Sales & Rental"),
        ("Other Mandates", "Sales & Rental"),
        ("Show House", "Sales & Rental"),
        ("Buyers Loaded", "Sales & Rental"),
        ("Referral Sent", "Sales & Rental"),
        ("Referral Received", "Sales & Rental"),
        ("Viewings", "Sales & Rental"),
        ("OTP / Lease Applications", "Sales & Rental"),
        ("Agreement of Sale & Lease Agreement", "Sales & Rental"),
        ("AOS Submitted to Bond Originator", "Sales & Rental"),
        ("Training Session", "Sales & Rental"),
    ]

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "is_active": self.is_active,
            "created_at": self.created_at,
        }

    def __repr__(self):
        return f"<ActivityDefinition {self.name} ({self.category})>"
