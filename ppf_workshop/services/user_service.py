"""Team member directory service."""

from __future__ import annotations

from ppf_workshop.core.exceptions import ConflictError, NotFoundError
from ppf_workshop.models import User
from ppf_workshop.schemas.users import UserCreate
from ppf_workshop.services.base_service import BaseService


class UserService(BaseService):
    def list_users(self) -> list[User]:
        return self.db.query(User).order_by(User.name.asc()).all()

    def get_user(self, user_id: str) -> User:
        user = self.db.query(User).filter(User.id == user_id).first()
        if user is None:
            raise NotFoundError(f"User not found: {user_id}", user_id=user_id)
        return user

    def create_user(self, payload: UserCreate) -> User:
        if self.db.query(User.id).filter(User.username == payload.username).first() is not None:
            raise ConflictError(f"Username already taken: {payload.username}")
        user = User(**payload.model_dump())
        self.db.add(user)
        self.commit()
        self.db.refresh(user)
        return user

    def delete_user(self, user_id: str) -> None:
        user = self.get_user(user_id)
        self.db.delete(user)
        self.commit()
