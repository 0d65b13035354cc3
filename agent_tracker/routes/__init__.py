from agent_tracker.routes.auth import router as auth_router
from agent_tracker.routes.users import router as users_router
from agent_tracker.routes.activities import router as activities_router
from agent_tracker.routes.goals import router as goals_router
from agent_tracker.routes.commissions import router as commissions_router
from agent_tracker.routes.dashboard import router as dashboard_router
from agent_tracker.routes.audit_log import router as audit_log_router

__all__ = [
    'auth_router',
    'users_router',
    'activities_router',
    'goals_router',
    'commissions_router',
    'dashboard_router',
    'audit_log_router',
]
