from agent_tracker.models.user import User
from agent_tracker.models.activity_definition import ActivityDefinition
from agent_tracker.models.monthly_goal import MonthlyGoal
from agent_tracker.models.commission_goal import GrossCommissionGoal
from agent_tracker.models.weekly_activity_entry import WeeklyActivityEntry
from agent_tracker.models.commission_transaction import CommissionTransaction
from agent_tracker.models.audit_record import AuditRecord

__all__ = [
    "User",
    "ActivityDefinition",
    "MonthlyGoal",
    "GrossCommissionGoal",
    "WeeklyActivityEntry",
    "CommissionTransaction",
    "AuditRecord",
]
