"""
Commission aggregation.

Per-user yearly totals, and the office overview that pairs every active
agent with their total for administrators.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import List

from agent_tracker.errors import StoreError

logger = logging.getLogger(__name__)


@dataclass
class AgentTotal:
    user_id: int
    username: str
    full_name: str
    total_commission: Decimal
    available: bool = True

    def to_dict(self) -> dict:
        return {
            "agent": {
                "id": self.user_id,
                "username": self.username,
                "full_name": self.full_name,
            },
            "total_commission": self.total_commission,
            "available": self.available,
        }


class CommissionAggregator:
    """Sums commission transactions through the injected repositories."""

    def __init__(self, users, commissions):
        self.users = users
        self.commissions = commissions

    def yearly_total(self, user_id: int, year: int) -> Decimal:
        return self.commissions.total_for_user(user_id, year)

    def office_overview(self, year: int) -> List[AgentTotal]:
        """One entry per active agent with their total for the year.

        A failure summing one agent's transactions is logged and reported
        as a zero total with available=False; the other agents are still
        returned.
        """
        overview = []
        for agent in self.users.list_active_agents():
            try:
                total = self.yearly_total(agent.id, year)
                available = True
            except StoreError:
                logger.exception(f"Could not total commission for agent {agent.id} ({year})")
                total = Decimal("0")
                available = False

            overview.append(
                AgentTotal(
                    user_id=agent.id,
                    username=agent.username,
                    full_name=agent.full_name,
                    total_commission=total,
                    available=available,
                )
            )
        return overview
