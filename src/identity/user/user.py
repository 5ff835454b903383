"""User aggregate — an account that is either a customer or a truck owner."""

from datetime import date, datetime
from enum import Enum

import bcrypt
from sqlalchemy import Date, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from identity.shared.email import normalize_email
from shared import clock
from shared.config import get_settings
from shared.database import Base, UtcDateTime
from shared.exceptions import ValidationError

# bcrypt only looks at the first 72 bytes of a password
_MAX_PASSWORD_BYTES = 72


class UserRole(Enum):
    CUSTOMER = "customer"
    TRUCK_OWNER = "truckOwner"


def hash_password(password: str) -> str:
    rounds = get_settings().password_hash_rounds
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


class User(Base):
    __tablename__ = "users"

    user_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(254), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(60), nullable=False)
    role: Mapped[str] = mapped_column(String(20), nullable=False, default=UserRole.CUSTOMER.value)
    birth_date: Mapped[date] = mapped_column(Date, nullable=False)
    created_at: Mapped[datetime] = mapped_column(UtcDateTime, nullable=False)

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def register(cls, name, email, password, role=None, birth_date=None):
        """Build a new, not yet persisted user after validating the inputs."""
        name = (name or "").strip()
        if not name or not email or not password:
            raise ValidationError({"user": ["Name, email, and password are required"]})

        if role and role not in {r.value for r in UserRole}:
            raise ValidationError({"role": ['Role must be either "customer" or "truckOwner"']})

        if len(password.encode("utf-8")) > _MAX_PASSWORD_BYTES:
            raise ValidationError({"password": [f"Password must be at most {_MAX_PASSWORD_BYTES} bytes"]})

        now = clock.now()
        return cls(
            name=name,
            email=normalize_email(email),
            password_hash=hash_password(password),
            role=role or UserRole.CUSTOMER.value,
            birth_date=birth_date or now.date(),
            created_at=now,
        )

    # -------------------------------------------------------------------
    # Behaviour
    # -------------------------------------------------------------------
    @property
    def is_truck_owner(self) -> bool:
        return self.role == UserRole.TRUCK_OWNER.value

    @property
    def is_customer(self) -> bool:
        return self.role == UserRole.CUSTOMER.value

    def verify_password(self, password: str) -> bool:
        if not password:
            return False
        try:
            return bcrypt.checkpw(password.encode("utf-8"), self.password_hash.encode("utf-8"))
        except ValueError:
            # Over-long input or a malformed stored hash
            return False
