"""
Authentication utilities for bearer-token auth.

Tokens are signed with itsdangerous and carry the caller's id, username and
role. The rest of the application only ever sees the resulting Caller.
"""

import logging
from typing import Optional

from fastapi import Request, Depends
from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired
from passlib.context import CryptContext

from agent_tracker.config import SECRET_KEY, TOKEN_EXPIRE_MINUTES
from agent_tracker.errors import AuthenticationError
from agent_tracker.models import User
from agent_tracker.services.access import Caller, require_office_role

logger = logging.getLogger(__name__)

# New hashes use pbkdf2_sha256; bcrypt hashes are still accepted
pwd_context = CryptContext(schemes=["pbkdf2_sha256", "bcrypt"], deprecated="auto")

serializer = URLSafeTimedSerializer(SECRET_KEY, salt="agent-tracker-session")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        # Malformed or unrecognised hash
        return False


def get_password_hash(password: str) -> str:
    """Hash a password for storing."""
    return pwd_context.hash(password)


def create_access_token(user: User) -> str:
    """Create a signed token for a user."""
    return serializer.dumps({
        "user_id": user.id,
        "username": user.username,
        "role": user.role,
    })


def decode_access_token(token: str) -> Optional[Caller]:
    """Decode and validate a token. Returns None if it is invalid or expired."""
    try:
        data = serializer.loads(token, max_age=TOKEN_EXPIRE_MINUTES * 60)
    except (BadSignature, SignatureExpired):
        return None

    try:
        return Caller(user_id=int(data["user_id"]), username=data["username"], role=data["role"])
    except (KeyError, TypeError, ValueError):
        return None


def _bearer_token(request: Request) -> Optional[str]:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_current_caller(request: Request) -> Caller:
    """
    Get the caller from the Authorization header.
    Raises AuthenticationError if there is no valid token.
    """
    token = _bearer_token(request)
    if not token:
        raise AuthenticationError("No token provided")

    caller = decode_access_token(token)
    if caller is None:
        raise AuthenticationError("Invalid token")

    # Read by the audit middleware once the response is ready
    request.state.caller = caller
    return caller


def require_office_caller(caller: Caller = Depends(get_current_caller)) -> Caller:
    """Dependency for admin/manager-only routes."""
    return require_office_role(caller)


def authenticate_user(users, username: str, password: str) -> Optional[User]:
    """
    Authenticate a user by username and password.
    Returns the user if authentication succeeds, None otherwise.
    """
    user = users.get_by_username(username)
    if not user or not user.is_active:
        return None

    if not verify_password(password, user.password_hash):
        return None

    return user
