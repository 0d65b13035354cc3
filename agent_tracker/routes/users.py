"""
User Management Router

Office staff (admin/manager) create, list and update users. Users are
deactivated through is_active rather than deleted. Any user may change
their own password; office staff may change anyone's.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from agent_tracker.audit import mark_audit_record
from agent_tracker.auth.utils import get_current_caller, get_password_hash, require_office_caller
from agent_tracker.errors import AuthorizationError, ValidationError
from agent_tracker.repositories import Repositories, get_repositories
from agent_tracker.services.access import Caller, can_act_for
from agent_tracker.services.validators import validate_new_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


class UserCreateRequest(BaseModel):
    username: str
    email: str
    password: str
    full_name: str
    role: str = "agent"


class UserUpdateRequest(BaseModel):
    email: Optional[str] = None
    full_name: Optional[str] = None
    is_active: Optional[bool] = None


class PasswordChangeRequest(BaseModel):
    password: str


@router.post("")
def create_user(
    data: UserCreateRequest,
    request: Request,
    caller: Caller = Depends(require_office_caller),
    repos: Repositories = Depends(get_repositories),
):
    validate_new_user(data.username, data.email, data.password, data.full_name, data.role).raise_if_invalid()

    user = repos.users.create(
        username=data.username.strip(),
        email=data.email.strip(),
        password_hash=get_password_hash(data.password),
        full_name=data.full_name.strip(),
        role=data.role,
    )
    mark_audit_record(request, user.id)
    logger.info(f"User {user.username} ({user.role}) created by {caller.username}")
    return {"id": user.id, "message": "User created successfully"}


@router.get("")
def list_users(
    caller: Caller = Depends(require_office_caller),
    repos: Repositories = Depends(get_repositories),
):
    return [user.to_dict() for user in repos.users.list_all()]


@router.put("/{user_id}")
def update_user(
    user_id: int,
    data: UserUpdateRequest,
    request: Request,
    caller: Caller = Depends(require_office_caller),
    repos: Repositories = Depends(get_repositories),
):
    if data.email is not None and "@" not in data.email:
        raise ValidationError("A valid email is required")

    user = repos.users.update(
        user_id,
        email=data.email,
        full_name=data.full_name,
        is_active=data.is_active,
    )
    mark_audit_record(request, user.id)
    if data.is_active is False:
        logger.info(f"User {user.username} deactivated by {caller.username}")
    return {"message": "User updated successfully"}


@router.put("/{user_id}/password")
def change_password(
    user_id: int,
    data: PasswordChangeRequest,
    request: Request,
    caller: Caller = Depends(get_current_caller),
    repos: Repositories = Depends(get_repositories),
):
    if not can_act_for(caller, user_id):
        raise AuthorizationError("Access denied")
    if not data.password:
        raise ValidationError("Password is required")

    repos.users.set_password_hash(user_id, get_password_hash(data.password))
    mark_audit_record(request, user_id)
    return {"message": "Password updated successfully"}
