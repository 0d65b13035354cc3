from typing import List, Optional

from sqlalchemy.orm import Session

from agent_tracker.database import utc_now
from agent_tracker.errors import NotFoundError
from agent_tracker.models import User
from agent_tracker.repositories.base import store_errors, read_errors


class UserRepository:
    """Users and their lifecycle (create, update, deactivate, delete)."""

    UPDATABLE_FIELDS = ("email", "full_name", "is_active")

    def __init__(self, db: Session):
        self.db = db

    def get(self, user_id: int) -> Optional[User]:
        with read_errors(self.db):
            return self.db.query(User).filter(User.id == user_id).first()

    def get_by_username(self, username: str) -> Optional[User]:
        with read_errors(self.db):
            return self.db.query(User).filter(User.username == username).first()

    def list_all(self) -> List[User]:
        with read_errors(self.db):
            return self.db.query(User).order_by(User.full_name).all()

    def list_active_agents(self) -> List[User]:
        with read_errors(self.db):
            return (
                self.db.query(User)
                .filter(User.role == "agent", User.is_active.is_(True))
                .order_by(User.full_name)
                .all()
            )

    def create(
        self,
        username: str,
        email: str,
        password_hash: str,
        full_name: str,
        role: str = "agent",
    ) -> User:
        user = User(
            username=username,
            email=email,
            password_hash=password_hash,
            full_name=full_name,
            role=role,
            is_active=True,
        )
        with store_errors(self.db, integrity_message="Username or email already exists"):
            self.db.add(user)
        self.db.refresh(user)
        return user

    def update(self, user_id: int, **fields) -> User:
        """Update the editable profile fields; the role never changes."""
        user = self.get(user_id)
        if not user:
            raise NotFoundError("User not found")

        with store_errors(self.db, integrity_message="Email already exists"):
            for name, value in fields.items():
                if name in self.UPDATABLE_FIELDS and value is not None:
                    setattr(user, name, value)
            user.updated_at = utc_now()
        self.db.refresh(user)
        return user

    def set_password_hash(self, user_id: int, password_hash: str) -> None:
        user = self.get(user_id)
        if not user:
            raise NotFoundError("User not found")

        with store_errors(self.db):
            user.password_hash = password_hash
            user.updated_at = utc_now()

    def delete(self, user_id: int) -> None:
        """Permanently remove a user; their goals, entries and transactions go with them."""
        user = self.get(user_id)
        if not user:
            raise NotFoundError("User not found")

        with store_errors(self.db):
            self.db.delete(user)
