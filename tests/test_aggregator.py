"""
Unit tests for commission aggregation, run against in-memory repositories.
"""

from decimal import Decimal

from agent_tracker.services.aggregator import CommissionAggregator
from fakes import FakeCommissions, FakeUsers, agent


class TestYearlyTotal:
    def test_total_is_passed_through(self):
        aggregator = CommissionAggregator(
            FakeUsers([]), FakeCommissions({(1, 2025): Decimal("4000")})
        )
        assert aggregator.yearly_total(1, 2025) == Decimal("4000")

    def test_no_transactions_is_zero(self):
        aggregator = CommissionAggregator(FakeUsers([]), FakeCommissions())
        assert aggregator.yearly_total(1, 2025) == Decimal("0")


class TestOfficeOverview:
    """Tests for CommissionAggregator.office_overview."""

    def test_one_entry_per_active_agent(self):
        users = FakeUsers([
            agent(1),
            agent(2),
            agent(3, is_active=False),
            agent(4, role="admin"),
        ])
        commissions = FakeCommissions({(1, 2025): Decimal("1500"), (2, 2025): Decimal("250")})

        overview = CommissionAggregator(users, commissions).office_overview(2025)

        assert [entry.user_id for entry in overview] == [1, 2]
        assert [entry.total_commission for entry in overview] == [Decimal("1500"), Decimal("250")]
        assert all(entry.available for entry in overview)

    def test_agent_without_transactions_reports_zero(self):
        overview = CommissionAggregator(FakeUsers([agent(5)]), FakeCommissions()).office_overview(2025)
        assert overview[0].total_commission == Decimal("0")
        assert overview[0].available

    def test_failure_for_one_agent_does_not_drop_others(self):
        users = FakeUsers([agent(1), agent(2), agent(3)])
        commissions = FakeCommissions(
            {(1, 2025): Decimal("100"), (3, 2025): Decimal("300")}, failing_ids={2}
        )

        overview = CommissionAggregator(users, commissions).office_overview(2025)

        assert len(overview) == 3
        failed = overview[1]
        assert failed.user_id == 2
        assert failed.total_commission == Decimal("0")
        assert failed.available is False
        assert overview[2].total_commission == Decimal("300")

    def test_to_dict_shape(self):
        overview = CommissionAggregator(
            FakeUsers([agent(9, username="jane", full_name="Jane Doe")]),
            FakeCommissions({(9, 2025): Decimal("10")}),
        ).office_overview(2025)

        assert overview[0].to_dict() == {
            "agent": {"id": 9, "username": "jane", "full_name": "Jane Doe"},
            "total_commission": Decimal("10"),
            "available": True,
        }
