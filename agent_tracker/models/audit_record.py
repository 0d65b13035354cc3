from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from agent_tracker.database import Base, utc_now


class AuditRecord(Base):
    """One row per mutating request, written by the audit middleware."""

    __tablename__ = "audit_log"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    action = Column(String(255), nullable=False)  # "POST /api/goals"
    table_name = Column(String(100), nullable=True)
    record_id = Column(Integer, nullable=True)
    details = Column(Text, nullable=True)  # JSON
    ip_address = Column(String(64), nullable=True)
    created_at = Column(DateTime, nullable=False, default=utc_now)

    __table_args__ = (
        Index("ix_audit_log_user_created", "user_id", "created_at"),
    )

    user = relationship("User")

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "username": self.user.username if self.user else None,
            "action": self.action,
            "table_name": self.table_name,
            "record_id": self.record_id,
            "details": self.details,
            "ip_address": self.ip_address,
            "created_at": self.created_at,
        }

    def __repr__(self):
        return f"<AuditRecord {self.action} user:{self.user_id}>"
