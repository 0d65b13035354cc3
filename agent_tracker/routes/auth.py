import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from agent_tracker.auth.utils import authenticate_user, create_access_token, get_current_caller
from agent_tracker.errors import AuthenticationError, NotFoundError
from agent_tracker.repositories import Repositories, get_repositories
from agent_tracker.services.access import Caller

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


class LoginRequest(BaseModel):
    username: str
    password: str


@router.post("/login")
def login(data: LoginRequest, repos: Repositories = Depends(get_repositories)):
    """Exchange a username and password for a bearer token."""
    user = authenticate_user(repos.users, data.username, data.password)
    if not user:
        logger.warning(f"Failed login for username '{data.username}'")
        raise AuthenticationError("Invalid credentials")

    logger.info(f"User {user.username} logged in")
    return {
        "token": create_access_token(user),
        "user": {
            "id": user.id,
            "username": user.username,
            "email": user.email,
            "full_name": user.full_name,
            "role": user.role,
        },
    }


@router.get("/me")
def me(
    caller: Caller = Depends(get_current_caller),
    repos: Repositories = Depends(get_repositories),
):
    user = repos.users.get(caller.user_id)
    if not user:
        raise NotFoundError("User not found")
    return {
        "id": user.id,
        "username": user.username,
        "email": user.email,
        "full_name": user.full_name,
        "role": user.role,
    }
