# storefront/utils/security.py
from passlib.context import CryptContext

from storefront.utils.settings import BCRYPT_ROUNDS


class PasswordHasher:
    """Hashowanie haseł (bcrypt przez passlib)."""

    def __init__(self, rounds: int = BCRYPT_ROUNDS):
        self.context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    def hash(self, password: str) -> str:
        return self.context.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        return self.context.verify(password, password_hash)
