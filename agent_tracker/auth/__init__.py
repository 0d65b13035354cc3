from agent_tracker.auth.utils import (
    verify_password,
    get_password_hash,
    create_access_token,
    decode_access_token,
    get_current_caller,
    require_office_caller,
    authenticate_user,
)

__all__ = [
    "verify_password",
    "get_password_hash",
    "create_access_token",
    "decode_access_token",
    "get_current_caller",
    "require_office_caller",
    "authenticate_user",
]
