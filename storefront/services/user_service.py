import uuid
from typing import List

from storefront.domain.errors import UserAlreadyExists, UserNotFound
from storefront.domain.schemas import UserCreate
from storefront.domain.user import User
from storefront.repos.base import UserStore
from storefront.utils.logging import get_logger
from storefront.utils.security import PasswordHasher

logger = get_logger(__name__)


class UserService:
    def __init__(self, users: UserStore, hasher: PasswordHasher | None = None):
        self.users = users
        self.hasher = hasher or PasswordHasher()

    def register(self, payload: UserCreate) -> User:
        # email porównywany bez wielkości liter
        email = payload.email.strip().lower()
        if self.users.get_by_email(email):
            raise UserAlreadyExists(email)

        user = User(
            id=str(uuid.uuid4()),
            name=payload.name,
            email=email,
            password_hash=self.hasher.hash(payload.password),
        )
        created = self.users.create(user)
        logger.info(f"Zarejestrowano użytkownika {created.id} ({email})")
        return created

    def get_user(self, user_id: str) -> User:
        user = self.users.get_by_id(user_id)
        if not user:
            raise UserNotFound(user_id)
        return user

    def list_users(self) -> List[User]:
        return self.users.list()
