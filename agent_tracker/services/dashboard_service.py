"""
Dashboard resolution.

The caller's role picks exactly one of two views, once per request:

- AgentDashboard: the caller's own goals, commission target and total.
- OfficeOverview: every active agent with their commission total.

"Current" year and month always come from the wall clock.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List, Optional, Union

from agent_tracker.services.access import Caller
from agent_tracker.services.aggregator import AgentTotal, CommissionAggregator
from agent_tracker.services.periods import current_period, derive_targets


def commission_goal_payload(user_id: int, year: int, goal) -> dict:
    """Serialize a commission goal, or its zero placeholder, with derived targets."""
    annual = goal.annual_target if goal is not None else Decimal("0")
    targets = derive_targets(annual)
    return {
        "user_id": user_id,
        "year": year,
        "annual_target": annual,
        "quarterly_target": targets.quarterly,
        "monthly_target": targets.monthly,
    }


@dataclass
class AgentDashboard:
    user_id: int
    year: int
    month: int
    goals: List[dict] = field(default_factory=list)
    commission_goal: dict = field(default_factory=dict)
    total_commission: Decimal = Decimal("0")

    view = "agent"

    def to_dict(self) -> dict:
        return {
            "view": self.view,
            "year": self.year,
            "month": self.month,
            "goals": self.goals,
            "commission_goal": self.commission_goal,
            "total_commission": self.total_commission,
        }


@dataclass
class OfficeOverview:
    year: int
    agents: List[AgentTotal] = field(default_factory=list)

    view = "office"

    @property
    def office_total(self) -> Decimal:
        return sum((a.total_commission for a in self.agents), Decimal("0"))

    def to_dict(self) -> dict:
        return {
            "view": self.view,
            "year": self.year,
            "agent_count": len(self.agents),
            "agents": [entry.to_dict()["agent"] for entry in self.agents],
            "office_data": [entry.to_dict() for entry in self.agents],
            "office_total": self.office_total,
        }


DashboardView = Union[AgentDashboard, OfficeOverview]


def build_dashboard(caller: Caller, repos, today: Optional[date] = None) -> DashboardView:
    year, month = current_period(today)
    aggregator = CommissionAggregator(repos.users, repos.commissions)

    if caller.is_office:
        return OfficeOverview(year=year, agents=aggregator.office_overview(year))

    goals = repos.monthly_goals.list_for_period(caller.user_id, year, month)
    commission_goal = repos.commission_goals.get(caller.user_id, year)
    return AgentDashboard(
        user_id=caller.user_id,
        year=year,
        month=month,
        goals=[goal.to_dict() for goal in goals],
        commission_goal=commission_goal_payload(caller.user_id, year, commission_goal),
        total_commission=aggregator.yearly_total(caller.user_id, year),
    )
