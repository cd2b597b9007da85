from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session

from certportal.core.security import hash_password
from certportal.crud.base import CRUDBase
from certportal.models.user import User
from certportal.schemas.user import AdminCreate, AdminUpdate


class CRUDUser(CRUDBase[User, AdminCreate, AdminUpdate]):
    def create(self, db: Session, obj_in: AdminCreate, *, rounds: int) -> User:
        user = User(
            email=obj_in.email,
            password_hash=hash_password(obj_in.password, rounds),
            role=obj_in.role.value,
        )
        db.add(user); db.commit(); db.refresh(user)
        return user

    def update(self, db: Session, db_obj: User, obj_in: AdminUpdate, *, rounds: int) -> User:
        data = {}
        if obj_in.password:
            data["password_hash"] = hash_password(obj_in.password, rounds)
        if obj_in.role is not None:
            data["role"] = obj_in.role.value
        return super().update(db, db_obj, data)

    def get_by_email(self, db: Session, email: str) -> Optional[User]:
        return db.execute(select(User).where(User.email == email)).scalar_one_or_none()

    def list_all(self, db: Session) -> List[User]:
        return list(db.scalars(select(User).order_by(User.created_at)).all())


user_crud = CRUDUser(User)
