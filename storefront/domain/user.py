# storefront/domain/user.py
from dataclasses import dataclass, field
from datetime import datetime, timezone


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class User:
    """Konto klienta. Hasło trzymamy wyłącznie jako hash."""

    id: str
    name: str
    email: str
    password_hash: str
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)
