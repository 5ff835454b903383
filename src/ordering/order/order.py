"""Order aggregate — a placed purchase with its line items.

State Machine:
    PENDING → PREPARING → READY → COMPLETED
    CANCELLED (from PENDING, PREPARING)

Re-submitting the current status is only meaningful together with a new
pickup estimate. Customers may delay or cancel an order while it is pending.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum

from sqlalchemy import ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared import clock
from shared.database import Base, UtcDateTime
from shared.exceptions import ValidationError


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------
class OrderStatus(Enum):
    PENDING = "pending"
    PREPARING = "preparing"
    READY = "ready"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


_VALID_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PREPARING, OrderStatus.CANCELLED},
    OrderStatus.PREPARING: {OrderStatus.READY, OrderStatus.CANCELLED},
    OrderStatus.READY: {OrderStatus.COMPLETED},
    OrderStatus.COMPLETED: set(),
    OrderStatus.CANCELLED: set(),
}

# Largest value a Numeric(10, 2) column holds
MAX_TOTAL = Decimal("99999999.99")


# ---------------------------------------------------------------------------
# Entity: OrderItem
# ---------------------------------------------------------------------------
class OrderItem(Base):
    __tablename__ = "order_items"

    order_item_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    order_id: Mapped[int] = mapped_column(
        ForeignKey("orders.order_id", ondelete="CASCADE"), nullable=False, index=True
    )
    item_id: Mapped[int] = mapped_column(ForeignKey("menu_items.item_id"), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    order: Mapped["Order"] = relationship(back_populates="items")


# ---------------------------------------------------------------------------
# Aggregate Root: Order
# ---------------------------------------------------------------------------
class Order(Base):
    __tablename__ = "orders"

    order_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(ForeignKey("users.user_id"), nullable=False, index=True)
    truck_id: Mapped[int] = mapped_column(ForeignKey("trucks.truck_id"), nullable=False, index=True)
    order_status: Mapped[str] = mapped_column(String(20), nullable=False, default=OrderStatus.PENDING.value)
    total_price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    scheduled_pickup_time: Mapped[datetime] = mapped_column(UtcDateTime, nullable=False)
    estimated_earliest_pickup: Mapped[datetime | None] = mapped_column(UtcDateTime)
    created_at: Mapped[datetime] = mapped_column(UtcDateTime, nullable=False)

    items: Mapped[list[OrderItem]] = relationship(
        back_populates="order", cascade="all, delete-orphan", order_by=OrderItem.order_item_id
    )

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, user_id, truck_id, scheduled_pickup_time, lines):
        """Create a pending order from ``(item_id, quantity, price)`` lines."""
        if not lines:
            raise ValidationError({"cart": ["Cart is empty"]})

        items = [OrderItem(item_id=item_id, quantity=quantity, price=price) for item_id, quantity, price in lines]
        total = sum((item.price * item.quantity for item in items), Decimal("0.00"))
        if total > MAX_TOTAL:
            raise ValidationError({"total_price": [f"Order total cannot exceed {MAX_TOTAL}"]})
        return cls(
            user_id=user_id,
            truck_id=truck_id,
            order_status=OrderStatus.PENDING.value,
            total_price=total,
            scheduled_pickup_time=scheduled_pickup_time,
            estimated_earliest_pickup=scheduled_pickup_time,
            created_at=clock.now(),
            items=items,
        )

    # -------------------------------------------------------------------
    # State machine
    # -------------------------------------------------------------------
    @property
    def status(self) -> OrderStatus:
        return OrderStatus(self.order_status)

    @property
    def is_terminal(self) -> bool:
        return not _VALID_TRANSITIONS[self.status]

    def can_transition_to(self, new_status: OrderStatus) -> bool:
        return new_status in _VALID_TRANSITIONS[self.status]

    def _assert_can_transition(self, new_status: OrderStatus) -> None:
        if not self.can_transition_to(new_status):
            raise ValidationError(
                {
                    "order_status": [
                        f"Cannot change order status from {self.order_status} to {new_status.value}"
                    ]
                }
            )

    def update_status(self, order_status, estimated_earliest_pickup=None):
        try:
            new_status = OrderStatus(order_status)
        except ValueError:
            raise ValidationError({"order_status": ["Valid orderStatus is required"]}) from None

        if new_status == self.status and estimated_earliest_pickup is not None and not self.is_terminal:
            self.estimated_earliest_pickup = estimated_earliest_pickup
            return

        self._assert_can_transition(new_status)
        self.order_status = new_status.value
        if estimated_earliest_pickup is not None:
            self.estimated_earliest_pickup = estimated_earliest_pickup

    # -------------------------------------------------------------------
    # Customer changes (pending orders only)
    # -------------------------------------------------------------------
    def cancel_by_customer(self):
        if self.status != OrderStatus.PENDING:
            raise ValidationError({"order_status": ["Only pending orders can be cancelled"]})
        self.order_status = OrderStatus.CANCELLED.value

    def delay_pickup(self, scheduled_pickup_time):
        """Move the pickup to a later time; the estimate follows it."""
        if self.status != OrderStatus.PENDING:
            raise ValidationError({"order_status": ["Only pending orders can be delayed"]})
        if clock.as_utc(scheduled_pickup_time) <= clock.as_utc(self.scheduled_pickup_time):
            raise ValidationError(
                {"scheduled_pickup_time": ["New pickup time must be later than the current one"]}
            )
        self.scheduled_pickup_time = scheduled_pickup_time
        self.estimated_earliest_pickup = scheduled_pickup_time


def next_statuses() -> dict[str, list[str]]:
    """Allowed targets per status, in lifecycle order."""
    return {
        source.value: [target.value for target in OrderStatus if target in targets]
        for source, targets in _VALID_TRANSITIONS.items()
    }
