"""Login session — an opaque token that resolves to a user until it expires."""

from datetime import datetime, timedelta
from uuid import uuid4

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from shared.clock import as_utc
from shared.database import Base, UtcDateTime


class UserSession(Base):
    __tablename__ = "sessions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True
    )
    token: Mapped[str] = mapped_column(String(36), nullable=False, unique=True, index=True)
    expires_at: Mapped[datetime] = mapped_column(UtcDateTime, nullable=False)

    @classmethod
    def open(cls, user_id, now, ttl_minutes):
        return cls(
            user_id=user_id,
            token=str(uuid4()),
            expires_at=now + timedelta(minutes=ttl_minutes),
        )

    def is_expired(self, now) -> bool:
        return as_utc(self.expires_at) < now
