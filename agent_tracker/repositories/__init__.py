from dataclasses import dataclass

from fastapi import Depends
from sqlalchemy.orm import Session

from agent_tracker.database import get_db
from agent_tracker.repositories.users import UserRepository
from agent_tracker.repositories.activities import ActivityRepository
from agent_tracker.repositories.goals import (
    MonthlyGoalRepository,
    CommissionGoalRepository,
    WeeklyEntryRepository,
)
from agent_tracker.repositories.commissions import CommissionTransactionRepository
from agent_tracker.repositories.audit import AuditRepository


@dataclass
class Repositories:
    """One repository per entity, sharing a session."""

    users: UserRepository
    activities: ActivityRepository
    monthly_goals: MonthlyGoalRepository
    commission_goals: CommissionGoalRepository
    weekly_entries: WeeklyEntryRepository
    commissions: CommissionTransactionRepository
    audit: AuditRepository

    @classmethod
    def from_session(cls, db: Session) -> "Repositories":
        return cls(
            users=UserRepository(db),
            activities=ActivityRepository(db),
            monthly_goals=MonthlyGoalRepository(db),
            commission_goals=CommissionGoalRepository(db),
            weekly_entries=WeeklyEntryRepository(db),
            commissions=CommissionTransactionRepository(db),
            audit=AuditRepository(db),
        )


def get_repositories(db: Session = Depends(get_db)) -> Repositories:
    """FastAPI dependency yielding the repositories for this request."""
    return Repositories.from_session(db)


__all__ = [
    "Repositories",
    "get_repositories",
    "UserRepository",
    "ActivityRepository",
    "MonthlyGoalRepository",
    "CommissionGoalRepository",
    "WeeklyEntryRepository",
    "CommissionTransactionRepository",
    "AuditRepository",
]
