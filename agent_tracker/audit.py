"""
Audit trail for mutating requests.

The middleware in main.py calls write_audit_record once the response is
ready. Routes that create or change a single row name it with
mark_audit_record so the audit entry carries its id.
"""

import json
import logging
from typing import Optional

from fastapi import Request
from sqlalchemy.orm import sessionmaker

from agent_tracker.errors import TrackerError
from agent_tracker.repositories import AuditRepository

logger = logging.getLogger(__name__)

API_PREFIX = "/api"
READ_ONLY_METHODS = ("GET", "HEAD", "OPTIONS")


def mark_audit_record(request: Request, record_id: int) -> None:
    request.state.audit_record_id = record_id


def _table_from_path(path: str) -> Optional[str]:
    parts = [part for part in path.split("/") if part]
    if parts and parts[0] == API_PREFIX.strip("/"):
        parts = parts[1:]
    return parts[0] if parts else None


def write_audit_record(session_factory: sessionmaker, request: Request, status_code: int) -> None:
    """Record a mutating request made by an authenticated caller.

    Blocking; run it off the event loop.
    """
    caller = getattr(request.state, "caller", None)
    if caller is None or request.method in READ_ONLY_METHODS:
        return

    details = json.dumps({
        "method": request.method,
        "path": request.url.path,
        "status": status_code,
    })
    db = session_factory()
    try:
        AuditRepository(db).record(
            user_id=caller.user_id,
            action=f"{request.method} {request.url.path}",
            table_name=_table_from_path(request.url.path),
            record_id=getattr(request.state, "audit_record_id", None),
            details=details,
            ip_address=request.client.host if request.client else None,
        )
    except TrackerError as e:
        logger.warning(f"Audit record not written for {request.method} {request.url.path}: {e.message}")
    finally:
        db.close()
