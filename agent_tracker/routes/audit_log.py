"""
Audit Log Router

Read-only, paginated view of the audit trail written by the audit
middleware. Office staff only.
"""

from fastapi import APIRouter, Depends

from agent_tracker.auth.utils import require_office_caller
from agent_tracker.repositories import Repositories, get_repositories
from agent_tracker.services.access import Caller

router = APIRouter(tags=["audit"])

# Default page size
PAGE_SIZE = 50


@router.get("/audit-log")
def audit_log(
    page: int = 1,
    caller: Caller = Depends(require_office_caller),
    repos: Repositories = Depends(get_repositories),
):
    """
    Query params:
        page: Page number (1-indexed), defaults to 1
    """
    page = max(1, page)
    records, total_count = repos.audit.list_page(page, PAGE_SIZE)
    total_pages = max(1, (total_count + PAGE_SIZE - 1) // PAGE_SIZE)

    return {
        "records": [record.to_dict() for record in records],
        "page": page,
        "total_pages": total_pages,
        "total_count": total_count,
        "page_size": PAGE_SIZE,
    }
