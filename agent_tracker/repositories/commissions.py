from decimal import Decimal
from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from agent_tracker.errors import NotFoundError
from agent_tracker.models import CommissionTransaction
from agent_tracker.repositories.base import store_errors, read_errors


class CommissionTransactionRepository:
    """Append-only ledger of commission income. There is no update path."""

    def __init__(self, db: Session):
        self.db = db

    def list_for_user(self, user_id: int, year: int, month: Optional[int] = None) -> List[CommissionTransaction]:
        with read_errors(self.db):
            query = self.db.query(CommissionTransaction).filter(
                CommissionTransaction.user_id == user_id,
                CommissionTransaction.transaction_year == year,
            )
            if month is not None:
                query = query.filter(CommissionTransaction.transaction_month == month)
            return query.order_by(
                CommissionTransaction.created_at.desc(), CommissionTransaction.id.desc()
            ).all()

    def add(
        self,
        user_id: int,
        amount: Decimal,
        transaction_type: str,
        transaction_month: int,
        transaction_year: int,
        transaction_reference: Optional[str] = None,
        property_address: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> CommissionTransaction:
        transaction = CommissionTransaction(
            user_id=user_id,
            amount=amount,
            transaction_type=transaction_type,
            transaction_reference=transaction_reference,
            transaction_month=transaction_month,
            transaction_year=transaction_year,
            property_address=property_address,
            notes=notes,
        )
        with store_errors(self.db, NotFoundError, "User not found"):
            self.db.add(transaction)
        self.db.refresh(transaction)
        return transaction

    def total_for_user(self, user_id: int, year: int) -> Decimal:
        """Sum of a user's commission for the year; zero when there is none."""
        with read_errors(self.db):
            total = (
                self.db.query(func.sum(CommissionTransaction.amount))
                .filter(
                    CommissionTransaction.user_id == user_id,
                    CommissionTransaction.transaction_year == year,
                )
                .scalar()
            )
        return Decimal(str(total)) if total is not None else Decimal("0")
