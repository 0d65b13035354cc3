"""
Goals Router

Monthly activity goals and the annual gross commission goal. Both are
written with an upsert on their natural key, so saving a goal twice
updates it in place.
"""

from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from agent_tracker.auth.utils import get_current_caller
from agent_tracker.errors import NotFoundError
from agent_tracker.repositories import Repositories, get_repositories
from agent_tracker.services.access import Caller, resolve_subject
from agent_tracker.services.dashboard_service import commission_goal_payload
from agent_tracker.services.validators import (
    validate_commission_goal,
    validate_monthly_goal,
    validate_period,
)

router = APIRouter(tags=["goals"])


class MonthlyGoalRequest(BaseModel):
    activity_id: int
    year: int
    month: int
    goal_value: int
    user_id: Optional[int] = None


class CommissionGoalRequest(BaseModel):
    year: int
    annual_target: Decimal
    user_id: Optional[int] = None


# ---------------------------------------------------------------------------
# Monthly goals
# ---------------------------------------------------------------------------
@router.get("/goals/{year}/{month}")
def get_monthly_goals(
    year: int,
    month: int,
    user_id: Optional[int] = Query(None, alias="userId"),
    caller: Caller = Depends(get_current_caller),
    repos: Repositories = Depends(get_repositories),
):
    validate_period(year, month).raise_if_invalid()
    subject_id = resolve_subject(caller, user_id)
    goals = repos.monthly_goals.list_for_period(subject_id, year, month)
    return [goal.to_dict() for goal in goals]


@router.post("/goals")
def save_monthly_goal(
    data: MonthlyGoalRequest,
    caller: Caller = Depends(get_current_caller),
    repos: Repositories = Depends(get_repositories),
):
    subject_id = resolve_subject(caller, data.user_id)
    validate_monthly_goal(data.year, data.month, data.goal_value).raise_if_invalid()

    if not repos.activities.get(data.activity_id):
        raise NotFoundError("Activity not found")

    repos.monthly_goals.set_for_key(
        user_id=subject_id,
        activity_id=data.activity_id,
        year=data.year,
        month=data.month,
        goal_value=data.goal_value,
    )
    return {"message": "Goal saved"}


# ---------------------------------------------------------------------------
# Gross commission goals
# ---------------------------------------------------------------------------
@router.get("/commission-goals/{year}")
def get_commission_goal(
    year: int,
    user_id: Optional[int] = Query(None, alias="userId"),
    caller: Caller = Depends(get_current_caller),
    repos: Repositories = Depends(get_repositories),
):
    """Annual target with derived quarterly/monthly targets; zero if none is set."""
    validate_period(year).raise_if_invalid()
    subject_id = resolve_subject(caller, user_id)
    goal = repos.commission_goals.get(subject_id, year)
    return commission_goal_payload(subject_id, year, goal)


@router.post("/commission-goals")
def save_commission_goal(
    data: CommissionGoalRequest,
    caller: Caller = Depends(get_current_caller),
    repos: Repositories = Depends(get_repositories),
):
    subject_id = resolve_subject(caller, data.user_id)
    validate_commission_goal(data.year, data.annual_target).raise_if_invalid()

    repos.commission_goals.set_for_key(
        user_id=subject_id,
        year=data.year,
        annual_target=data.annual_target,
    )
    return {"message": "Commission goal saved"}
