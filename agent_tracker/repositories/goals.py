from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from agent_tracker.database import utc_now
from agent_tracker.models import MonthlyGoal, GrossCommissionGoal, WeeklyActivityEntry
from agent_tracker.repositories.base import store_errors, read_errors, upsert


class MonthlyGoalRepository:
    def __init__(self, db: Session):
        self.db = db

    def list_for_period(self, user_id: int, year: int, month: int) -> List[MonthlyGoal]:
        """Goals for one user and month, with their activity loaded."""
        with read_errors(self.db):
            return (
                self.db.query(MonthlyGoal)
                .options(joinedload(MonthlyGoal.activity))
                .filter(
                    MonthlyGoal.user_id == user_id,
                    MonthlyGoal.year == year,
                    MonthlyGoal.month == month,
                )
                .order_by(MonthlyGoal.activity_id)
                .all()
            )

    def set_for_key(self, user_id: int, activity_id: int, year: int, month: int, goal_value: int) -> None:
        now = utc_now()
        upsert(
            self.db,
            MonthlyGoal,
            key_columns=["user_id", "activity_id", "year", "month"],
            values={
                "user_id": user_id,
                "activity_id": activity_id,
                "year": year,
                "month": month,
                "goal_value": goal_value,
                "created_at": now,
                "updated_at": now,
            },
            update_columns=["goal_value", "updated_at"],
        )


class CommissionGoalRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: int, year: int) -> Optional[GrossCommissionGoal]:
        with read_errors(self.db):
            return (
                self.db.query(GrossCommissionGoal)
                .filter(GrossCommissionGoal.user_id == user_id, GrossCommissionGoal.year == year)
                .first()
            )

    def create(self, user_id: int, year: int, annual_target: Decimal) -> GrossCommissionGoal:
        """Plain insert; a second goal for the same year is a conflict."""
        goal = GrossCommissionGoal(user_id=user_id, year=year, annual_target=annual_target)
        with store_errors(self.db, integrity_message=f"Commission goal for {year} already exists"):
            self.db.add(goal)
        self.db.refresh(goal)
        return goal

    def set_for_key(self, user_id: int, year: int, annual_target: Decimal) -> None:
        now = utc_now()
        upsert(
            self.db,
            GrossCommissionGoal,
            key_columns=["user_id", "year"],
            values={
                "user_id": user_id,
                "year": year,
                "annual_target": annual_target,
                "created_at": now,
                "updated_at": now,
            },
            update_columns=["annual_target", "updated_at"],
        )


class WeeklyEntryRepository:
    def __init__(self, db: Session):
        self.db = db

    def list_for_week(self, user_id: int, week_start: date) -> List[WeeklyActivityEntry]:
        with read_errors(self.db):
            return (
                self.db.query(WeeklyActivityEntry)
                .options(joinedload(WeeklyActivityEntry.activity))
                .filter(
                    WeeklyActivityEntry.user_id == user_id,
                    WeeklyActivityEntry.week_start_date == week_start,
                )
                .order_by(WeeklyActivityEntry.activity_id)
                .all()
            )

    def set_for_key(
        self,
        user_id: int,
        activity_id: int,
        week_start: date,
        week_end: date,
        count_value: int,
    ) -> None:
        now = utc_now()
        upsert(
            self.db,
            WeeklyActivityEntry,
            key_columns=["user_id", "activity_id", "week_start_date"],
            values={
                "user_id": user_id,
                "activity_id": activity_id,
                "week_start_date": week_start,
                "week_end_date": week_end,
                "count_value": count_value,
                "entry_date": now,
                "created_at": now,
            },
            update_columns=["count_value", "week_end_date", "entry_date"],
        )
