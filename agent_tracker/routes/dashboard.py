import logging

from fastapi import APIRouter, Depends

from agent_tracker.auth.utils import get_current_caller
from agent_tracker.repositories import Repositories, get_repositories
from agent_tracker.services.access import Caller
from agent_tracker.services.dashboard_service import build_dashboard

logger = logging.getLogger(__name__)

router = APIRouter(tags=["dashboard"])


@router.get("/dashboard")
def dashboard(
    caller: Caller = Depends(get_current_caller),
    repos: Repositories = Depends(get_repositories),
):
    """Agent dashboard for agents, office overview for admins and managers."""
    view = build_dashboard(caller, repos)
    logger.debug(f"Dashboard ({view.view}) for {caller.username}")
    return view.to_dict()
