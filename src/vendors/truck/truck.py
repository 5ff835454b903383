"""Truck aggregate — a vendor that owns a menu and receives orders.

A truck is visible to customers only while both of its switches are on:
``truck_status`` (the truck is operating) and ``order_status`` (it is taking
new orders).
"""

from datetime import datetime
from enum import Enum

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from shared import clock
from shared.database import Base, UtcDateTime
from shared.exceptions import ValidationError

DEFAULT_PREP_TIME = 15
MAX_PREP_TIME = 180


class TruckStatus(Enum):
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"


class OrderAvailability(Enum):
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"


class Truck(Base):
    __tablename__ = "trucks"

    truck_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    truck_name: Mapped[str] = mapped_column(String(100), nullable=False)
    truck_logo: Mapped[str | None] = mapped_column(String(500))
    owner_id: Mapped[int] = mapped_column(
        ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, unique=True, index=True
    )
    truck_status: Mapped[str] = mapped_column(String(20), nullable=False, default=TruckStatus.AVAILABLE.value)
    order_status: Mapped[str] = mapped_column(String(20), nullable=False, default=OrderAvailability.AVAILABLE.value)
    average_prep_time: Mapped[int] = mapped_column(Integer, nullable=False, default=DEFAULT_PREP_TIME)
    created_at: Mapped[datetime] = mapped_column(UtcDateTime, nullable=False)

    @classmethod
    def create_for_owner(cls, owner_id, owner_name):
        """Every truck owner starts with one truck named after them, open for orders."""
        return cls(
            truck_name=f"{owner_name}'s Food Truck",
            owner_id=owner_id,
            truck_status=TruckStatus.AVAILABLE.value,
            order_status=OrderAvailability.AVAILABLE.value,
            average_prep_time=DEFAULT_PREP_TIME,
            created_at=clock.now(),
        )

    @property
    def accepts_orders(self) -> bool:
        return (
            self.truck_status == TruckStatus.AVAILABLE.value
            and self.order_status == OrderAvailability.AVAILABLE.value
        )

    def set_order_status(self, order_status):
        if order_status not in {s.value for s in OrderAvailability}:
            raise ValidationError({"order_status": ["Valid orderStatus (available/unavailable) is required"]})
        self.order_status = order_status

    def update_details(self, truck_name=None, truck_logo=None, truck_status=None, average_prep_time=None):
        """Apply a partial update; ``None`` leaves a field unchanged."""
        if truck_name is not None:
            truck_name = truck_name.strip()
            if not truck_name:
                raise ValidationError({"truck_name": ["Truck name cannot be empty"]})
            self.truck_name = truck_name

        if truck_logo is not None:
            self.truck_logo = truck_logo or None

        if truck_status is not None:
            if truck_status not in {s.value for s in TruckStatus}:
                raise ValidationError({"truck_status": ["Valid truckStatus (available/unavailable) is required"]})
            self.truck_status = truck_status

        if average_prep_time is not None:
            if not 1 <= average_prep_time <= MAX_PREP_TIME:
                raise ValidationError(
                    {"average_prep_time": [f"Average prep time must be between 1 and {MAX_PREP_TIME} minutes"]}
                )
            self.average_prep_time = average_prep_time
