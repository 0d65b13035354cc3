import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from agent_tracker.models import ActivityDefinition
from agent_tracker.repositories.base import store_errors, read_errors

logger = logging.getLogger(__name__)


class ActivityRepository:
    def __init__(self, db: Session):
        self.db = db

    def get(self, activity_id: int) -> Optional[ActivityDefinition]:
        with read_errors(self.db):
            return (
                self.db.query(ActivityDefinition)
                .filter(ActivityDefinition.id == activity_id)
                .first()
            )

    def list_active(self) -> List[ActivityDefinition]:
        with read_errors(self.db):
            return (
                self.db.query(ActivityDefinition)
                .filter(ActivityDefinition.is_active.is_(True))
                .order_by(ActivityDefinition.category, ActivityDefinition.name)
                .all()
            )

    def create(self, name: str, category: str) -> ActivityDefinition:
        activity = ActivityDefinition(name=name, category=category, is_active=True)
        with store_errors(self.db, integrity_message=f"Activity '{name}' already exists"):
            self.db.add(activity)
        self.db.refresh(activity)
        return activity

    def seed_defaults(self, catalog=None) -> int:
        """Insert any catalog activities missing by name.

        Safe to run repeatedly. Returns the number of activities inserted.
        """
        catalog = catalog if catalog is not None else ActivityDefinition.DEFAULT_CATALOG

        with read_errors(self.db):
            existing = {name for (name,) in self.db.query(ActivityDefinition.name).all()}

        missing = [(name, category) for name, category in catalog if name not in existing]
        if not missing:
            return 0

        with store_errors(self.db):
            for name, category in missing:
                self.db.add(ActivityDefinition(name=name, category=category, is_active=True))

        logger.info(f"Seeded {len(missing)} catalog activities")
        return len(missing)
