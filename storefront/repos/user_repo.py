# storefront/repos/user_repo.py
from typing import List

from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.data.models.user import UserModel
from storefront.domain.errors import InfrastructureError, UserAlreadyExists
from storefront.domain.user import User
from storefront.repos.transaction import atomic, reading


def _to_entity(row: UserModel) -> User:
    return User(
        id=row.id,
        name=row.name,
        email=row.email,
        password_hash=row.password_hash,
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_by_id(self, user_id: str) -> User | None:
        with reading("get user"):
            row = self.db.get(UserModel, user_id, populate_existing=True)
            return _to_entity(row) if row else None

    def get_by_email(self, email: str) -> User | None:
        with reading("get user by email"):
            row = self.db.execute(
                select(UserModel).where(UserModel.email == email)
            ).scalar_one_or_none()
            return _to_entity(row) if row else None

    def list(self) -> List[User]:
        with reading("list users"):
            rows = self.db.execute(
                select(UserModel).order_by(UserModel.created_at.desc())
            ).scalars().all()
            return [_to_entity(r) for r in rows]

    def create(self, user: User) -> User:
        try:
            with atomic(self.db, "create user"):
                self.db.execute(
                    insert(UserModel).values(
                        id=user.id,
                        name=user.name,
                        email=user.email,
                        password_hash=user.password_hash,
                        created_at=user.created_at,
                        updated_at=user.updated_at,
                    )
                )
        except InfrastructureError as e:
            # unikalny email: wyścig dwóch rejestracji na ten sam adres
            if isinstance(e.__cause__, IntegrityError):
                raise UserAlreadyExists(user.email) from e.__cause__
            raise
        return user
