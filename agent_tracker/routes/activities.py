import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel

from agent_tracker.audit import mark_audit_record
from agent_tracker.auth.utils import get_current_caller, require_office_caller
from agent_tracker.errors import NotFoundError, ValidationError
from agent_tracker.repositories import Repositories, get_repositories
from agent_tracker.services.access import Caller, resolve_subject
from agent_tracker.services.periods import week_bounds, week_start_monday
from agent_tracker.services.validators import validate_weekly_entry

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/activities", tags=["activities"])


class ActivityCreateRequest(BaseModel):
    name: str
    category: str


class WeeklyEntryRequest(BaseModel):
    activity_id: int
    week_start_date: date
    week_end_date: Optional[date] = None
    count_value: int
    user_id: Optional[int] = None


# ---------------------------------------------------------------------------
# Activity catalog
# ---------------------------------------------------------------------------
@router.get("")
def list_activities(
    caller: Caller = Depends(get_current_caller),
    repos: Repositories = Depends(get_repositories),
):
    return [activity.to_dict() for activity in repos.activities.list_active()]


@router.post("")
def add_activity(
    data: ActivityCreateRequest,
    request: Request,
    caller: Caller = Depends(require_office_caller),
    repos: Repositories = Depends(get_repositories),
):
    name = data.name.strip()
    category = data.category.strip()
    if not name or not category:
        raise ValidationError("Activity name and category are required")

    activity = repos.activities.create(name, category)
    mark_audit_record(request, activity.id)
    logger.info(f"Activity '{activity.name}' added to {activity.category} by {caller.username}")
    return {"id": activity.id, "message": "Activity added"}


# ---------------------------------------------------------------------------
# Weekly entries
# ---------------------------------------------------------------------------
@router.get("/weekly/{week_start}")
def get_weekly_entries(
    week_start: date,
    user_id: Optional[int] = Query(None, alias="userId"),
    caller: Caller = Depends(get_current_caller),
    repos: Repositories = Depends(get_repositories),
):
    subject_id = resolve_subject(caller, user_id)
    entries = repos.weekly_entries.list_for_week(subject_id, week_start_monday(week_start))
    return [entry.to_dict() for entry in entries]


@router.post("/weekly")
def submit_weekly_entry(
    data: WeeklyEntryRequest,
    caller: Caller = Depends(get_current_caller),
    repos: Repositories = Depends(get_repositories),
):
    """Record an activity count for a week. Re-submitting a week overwrites it.

    Entries are filed under the Monday of the week containing week_start_date.
    """
    subject_id = resolve_subject(caller, data.user_id)

    week_start, default_end = week_bounds(week_start_monday(data.week_start_date))
    week_end = data.week_end_date or default_end
    validate_weekly_entry(week_start, week_end, data.count_value).raise_if_invalid()

    if not repos.activities.get(data.activity_id):
        raise NotFoundError("Activity not found")

    repos.weekly_entries.set_for_key(
        user_id=subject_id,
        activity_id=data.activity_id,
        week_start=week_start,
        week_end=week_end,
        count_value=data.count_value,
    )
    return {"message": "Activity recorded"}
