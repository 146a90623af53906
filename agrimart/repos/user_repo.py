from sqlalchemy import exists, select
from sqlalchemy.orm import Session

from agrimart.data.models.user import UserModel
from agrimart.domain.enums import UserRole


class UserRepo:
    """Users are issued by the login service; here they are only looked up (and seeded)."""

    def __init__(self, db: Session):
        self.db = db

    def is_seller(self, user_id: int) -> bool:
        return self.db.execute(
            select(exists().where(UserModel.id == user_id, UserModel.role == UserRole.SELLER))
        ).scalar()

    def has_users(self) -> bool:
        return self.db.execute(select(UserModel.id).limit(1)).first() is not None

    def add_user(self, name: str, role: UserRole) -> UserModel:
        user = UserModel(name=name, role=role)
        self.db.add(user)
        self.db.flush()
        return user
