"""
Unit tests for dashboard resolution.

The caller's role picks exactly one view: agents get their own dashboard,
admins and managers get the office overview.
"""

from datetime import date
from decimal import Decimal

from agent_tracker.services.access import Caller
from agent_tracker.services.dashboard_service import (
    AgentDashboard,
    OfficeOverview,
    build_dashboard,
    commission_goal_payload,
)
from fakes import FakeGoal, agent, fake_repos

TODAY = date(2025, 3, 14)


class TestAgentDashboard:
    def test_agent_gets_own_view_for_current_month(self):
        repos = fake_repos(
            monthly_goals=[
                FakeGoal(user_id=7, activity_id=1, year=2025, month=3, goal_value=10),
                FakeGoal(user_id=7, activity_id=1, year=2025, month=2, goal_value=99),
                FakeGoal(user_id=8, activity_id=1, year=2025, month=3, goal_value=5),
            ],
            commission_goals={(7, 2025): FakeGoal(annual_target=Decimal("120000"))},
            totals={(7, 2025): Decimal("4000")},
        )
        caller = Caller(user_id=7, username="agent7", role="agent")

        view = build_dashboard(caller, repos, today=TODAY)

        assert isinstance(view, AgentDashboard)
        assert repos.monthly_goals.calls == [(7, 2025, 3)]
        data = view.to_dict()
        assert data["view"] == "agent"
        assert (data["year"], data["month"]) == (2025, 3)
        assert [g["goal_value"] for g in data["goals"]] == [10]
        assert data["commission_goal"]["quarterly_target"] == Decimal("30000")
        assert data["commission_goal"]["monthly_target"] == Decimal("10000")
        assert data["total_commission"] == Decimal("4000")

    def test_agent_without_goal_gets_zero_placeholder(self):
        view = build_dashboard(Caller(7, "agent7", "agent"), fake_repos(), today=TODAY)
        assert view.commission_goal["annual_target"] == Decimal("0")
        assert view.commission_goal["monthly_target"] == Decimal("0")
        assert view.total_commission == Decimal("0")


class TestOfficeOverview:
    def test_office_roles_get_overview(self):
        repos = fake_repos(
            users=[agent(1), agent(2)],
            totals={(1, 2025): Decimal("1000"), (2, 2025): Decimal("500")},
        )
        for role in ("admin", "manager"):
            view = build_dashboard(Caller(100, role, role), repos, today=TODAY)
            assert isinstance(view, OfficeOverview)
            data = view.to_dict()
            assert data["view"] == "office"
            assert data["agent_count"] == 2
            assert data["office_total"] == Decimal("1500")
            assert [a["id"] for a in data["agents"]] == [1, 2]

    def test_overview_does_not_read_goals(self):
        repos = fake_repos(users=[agent(1)])
        build_dashboard(Caller(100, "admin", "admin"), repos, today=TODAY)
        assert repos.monthly_goals.calls == []

    def test_unavailable_agent_is_flagged(self):
        repos = fake_repos(users=[agent(1), agent(2)], failing_ids={1}, totals={(2, 2025): Decimal("5")})
        data = build_dashboard(Caller(100, "admin", "admin"), repos, today=TODAY).to_dict()
        assert [row["available"] for row in data["office_data"]] == [False, True]
        assert data["office_total"] == Decimal("5")


class TestCommissionGoalPayload:
    def test_payload_with_goal(self):
        payload = commission_goal_payload(3, 2025, FakeGoal(annual_target=Decimal("100")))
        assert payload == {
            "user_id": 3,
            "year": 2025,
            "annual_target": Decimal("100"),
            "quarterly_target": Decimal("25"),
            "monthly_target": Decimal("8"),
        }

    def test_payload_without_goal(self):
        payload = commission_goal_payload(3, 2025, None)
        assert payload["annual_target"] == 0
        assert payload["quarterly_target"] == 0
