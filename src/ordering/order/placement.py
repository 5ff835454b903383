"""Order placement — turn a customer's cart into an order.

Everything happens inside the caller's transaction: the order and its items
are inserted and the cart rows deleted together, or not at all.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from sqlalchemy.orm import Session

from ordering.cart.cart import Cart
from ordering.order.order import Order
from ordering.pickup.slots import PickupPolicy
from shared.exceptions import ValidationError
from shared.utils.logging import get_logger
from vendors.truck.queries import get_truck

logger = get_logger(__name__)


class PlaceOrder(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: int
    scheduled_pickup_time: datetime | None = None


def place_order(session: Session, command: PlaceOrder, policy: PickupPolicy | None = None) -> Order:
    if command.scheduled_pickup_time is None:
        raise ValidationError({"scheduled_pickup_time": ["scheduledPickupTime is required"]})

    cart = Cart.for_user(session, command.user_id)
    if cart.is_empty:
        raise ValidationError({"cart": ["Cart is empty"]})
    if len(cart.truck_ids) > 1:
        raise ValidationError({"cart": ["Cannot order from multiple trucks"]})

    truck = get_truck(session, cart.truck_id)
    if not truck.accepts_orders:
        raise ValidationError({"truck": ["This truck is not currently accepting orders"]})

    policy = policy or PickupPolicy.from_settings()
    pickup_time = policy.validate(command.scheduled_pickup_time, prep_minutes=truck.average_prep_time)

    order = Order.place(
        user_id=command.user_id,
        truck_id=truck.truck_id,
        scheduled_pickup_time=pickup_time,
        lines=[(item.item_id, item.quantity, item.price) for item in cart.items],
    )
    session.add(order)
    cart.clear()
    session.flush()

    logger.info(
        "order_placed",
        order_id=order.order_id,
        user_id=command.user_id,
        truck_id=truck.truck_id,
        total_price=str(order.total_price),
        item_count=len(order.items),
    )
    return order
