from sqlalchemy import Column, Integer, String, Boolean, DateTime, CheckConstraint
from sqlalchemy.orm import relationship

from agent_tracker.database import Base, utc_now


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    username = Column(String(100), unique=True, nullable=False, index=True)
    email = Column(String(255), unique=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    full_name = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, index=True)  # admin, manager, agent
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=utc_now)
    updated_at = Column(DateTime, nullable=False, default=utc_now, onupdate=utc_now)

    __table_args__ = (
        CheckConstraint("role IN ('admin', 'manager', 'agent')", name="ck_users_role"),
    )

    # Period-scoped records; the database cascades the delete
    monthly_goals = relationship(
        "MonthlyGoal", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
    commission_goals = relationship(
        "GrossCommissionGoal", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
    weekly_entries = relationship(
        "WeeklyActivityEntry", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )
    commission_transactions = relationship(
        "CommissionTransaction", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )

    ROLES = ["admin", "manager", "agent"]

    def to_dict(self):
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "full_name": self.full_name,
            "role": self.role,
            "is_active": self.is_active,
            "created_at": self.created_at,
        }

    def __repr__(self):
        return f"<User {self.username} ({self.role})>"
