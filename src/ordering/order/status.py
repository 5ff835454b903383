"""Owner-driven order progress and customer changes to a pending order."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from sqlalchemy.orm import Session

from ordering.order.order import Order, OrderStatus
from ordering.order.queries import get_customer_order, get_truck_order
from ordering.pickup.slots import PickupPolicy
from shared.exceptions import ValidationError
from shared.utils.logging import get_logger
from vendors.truck.queries import get_truck

logger = get_logger(__name__)


class UpdateOrderStatus(BaseModel):
    model_config = ConfigDict(frozen=True)

    truck_id: int
    order_id: int
    order_status: str | None = None
    estimated_earliest_pickup: datetime | None = None


class CancelOrder(BaseModel):
    """A customer withdraws an order the truck has not started on."""

    model_config = ConfigDict(frozen=True)

    user_id: int
    order_id: int


class DelayPickup(BaseModel):
    """A customer pushes back the pickup of an order the truck has not started on."""

    model_config = ConfigDict(frozen=True)

    user_id: int
    order_id: int
    scheduled_pickup_time: datetime | None = None


def update_order_status(session: Session, command: UpdateOrderStatus, policy: PickupPolicy | None = None) -> Order:
    if command.order_status not in {s.value for s in OrderStatus}:
        raise ValidationError({"order_status": ["Valid orderStatus is required"]})

    order = get_truck_order(session, command.truck_id, command.order_id, action="update")

    estimate = command.estimated_earliest_pickup
    if estimate is not None:
        estimate = (policy or PickupPolicy.from_settings()).to_utc(estimate)

    previous = order.order_status
    order.update_status(command.order_status, estimate)
    session.flush()

    logger.info(
        "order_status_updated",
        order_id=order.order_id,
        truck_id=command.truck_id,
        from_status=previous,
        to_status=order.order_status,
    )
    return order


def cancel_order(session: Session, command: CancelOrder) -> Order:
    order = get_customer_order(session, command.user_id, command.order_id, action="cancel")
    order.cancel_by_customer()
    session.flush()

    logger.info("order_cancelled", order_id=order.order_id, user_id=command.user_id)
    return order


def delay_pickup(session: Session, command: DelayPickup, policy: PickupPolicy | None = None) -> Order:
    if command.scheduled_pickup_time is None:
        raise ValidationError({"scheduled_pickup_time": ["scheduledPickupTime is required"]})

    order = get_customer_order(session, command.user_id, command.order_id, action="delay")
    if order.status != OrderStatus.PENDING:
        raise ValidationError({"order_status": ["Only pending orders can be delayed"]})

    truck = get_truck(session, order.truck_id)
    policy = policy or PickupPolicy.from_settings()
    pickup_time = policy.validate(command.scheduled_pickup_time, prep_minutes=truck.average_prep_time)

    previous = order.scheduled_pickup_time
    order.delay_pickup(pickup_time)
    session.flush()

    logger.info(
        "order_pickup_delayed",
        order_id=order.order_id,
        user_id=command.user_id,
        from_time=previous.isoformat(),
        to_time=pickup_time.isoformat(),
    )
    return order
