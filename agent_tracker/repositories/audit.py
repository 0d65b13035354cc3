from typing import List, Optional, Tuple

from sqlalchemy.orm import Session, selectinload

from agent_tracker.models import AuditRecord
from agent_tracker.repositories.base import store_errors, read_errors


class AuditRepository:
    def __init__(self, db: Session):
        self.db = db

    def record(
        self,
        user_id: Optional[int],
        action: str,
        table_name: Optional[str] = None,
        record_id: Optional[int] = None,
        details: Optional[str] = None,
        ip_address: Optional[str] = None,
    ) -> None:
        with store_errors(self.db):
            self.db.add(
                AuditRecord(
                    user_id=user_id,
                    action=action,
                    table_name=table_name,
                    record_id=record_id,
                    details=details,
                    ip_address=ip_address,
                )
            )

    def list_page(self, page: int, page_size: int) -> Tuple[List[AuditRecord], int]:
        """Newest-first page of audit records plus the total count."""
        page = max(1, page)
        with read_errors(self.db):
            query = self.db.query(AuditRecord)
            total_count = query.count()
            records = (
                query.options(selectinload(AuditRecord.user))
                .order_by(AuditRecord.created_at.desc(), AuditRecord.id.desc())
                .offset((page - 1) * page_size)
                .limit(page_size)
                .all()
            )
        return records, total_count
