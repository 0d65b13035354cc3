from agent_tracker.services.periods import (
    PeriodTargets,
    derive_targets,
    current_period,
    week_start_monday,
    week_bounds,
)
from agent_tracker.services.access import (
    Caller,
    resolve_subject,
    can_act_for,
    require_office_role,
)
from agent_tracker.services.aggregator import AgentTotal, CommissionAggregator
from agent_tracker.services.dashboard_service import (
    AgentDashboard,
    OfficeOverview,
    DashboardView,
    build_dashboard,
)

__all__ = [
    'PeriodTargets',
    'derive_targets',
    'current_period',
    'week_start_monday',
    'week_bounds',
    'Caller',
    'resolve_subject',
    'can_act_for',
    'require_office_role',
    'AgentTotal',
    'CommissionAggregator',
    'AgentDashboard',
    'OfficeOverview',
    'DashboardView',
    'build_dashboard',
]
