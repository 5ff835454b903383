"""Order read access for customers and truck owners.

A customer sees only their own orders and an owner only their truck's; an
order belonging to someone else is reported as missing.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.orm import Session

from identity.user.user import User
from ordering.order.order import Order, OrderItem
from shared.exceptions import ObjectNotFoundError
from vendors.menu.menu_item import MenuItem
from vendors.truck.truck import Truck


@dataclass(frozen=True)
class OrderLine:
    order_item_id: int
    item_id: int
    item_name: str
    quantity: int
    price: Decimal


@dataclass(frozen=True)
class OrderSummary:
    order_id: int
    user_id: int
    truck_id: int
    order_status: str
    total_price: Decimal
    scheduled_pickup_time: datetime
    estimated_earliest_pickup: datetime | None
    created_at: datetime
    truck_name: str | None = None
    customer_name: str | None = None


@dataclass(frozen=True)
class OrderDetails(OrderSummary):
    items: tuple[OrderLine, ...] = ()


def _summary(order: Order, **names) -> dict:
    return dict(
        order_id=order.order_id,
        user_id=order.user_id,
        truck_id=order.truck_id,
        order_status=order.order_status,
        total_price=order.total_price,
        scheduled_pickup_time=order.scheduled_pickup_time,
        estimated_earliest_pickup=order.estimated_earliest_pickup,
        created_at=order.created_at,
        **names,
    )


def _lines(session: Session, order_id: int) -> tuple[OrderLine, ...]:
    rows = session.execute(
        select(OrderItem, MenuItem.name)
        .join(MenuItem, MenuItem.item_id == OrderItem.item_id)
        .where(OrderItem.order_id == order_id)
        .order_by(OrderItem.order_item_id)
    ).all()
    return tuple(
        OrderLine(
            order_item_id=item.order_item_id,
            item_id=item.item_id,
            item_name=name,
            quantity=item.quantity,
            price=item.price,
        )
        for item, name in rows
    )


def get_customer_order(session: Session, user_id: int, order_id: int, action: str = "view") -> Order:
    order = session.scalar(select(Order).where(Order.order_id == order_id, Order.user_id == user_id))
    if order is None:
        raise ObjectNotFoundError(f"Order not found or you do not have permission to {action} it")
    return order


def get_truck_order(session: Session, truck_id: int, order_id: int, action: str = "view") -> Order:
    order = session.scalar(select(Order).where(Order.order_id == order_id, Order.truck_id == truck_id))
    if order is None:
        raise ObjectNotFoundError(f"Order not found or you do not have permission to {action} it")
    return order


def my_orders(session: Session, user_id: int) -> list[OrderSummary]:
    rows = session.execute(
        select(Order, Truck.truck_name)
        .join(Truck, Truck.truck_id == Order.truck_id)
        .where(Order.user_id == user_id)
        .order_by(Order.created_at.desc(), Order.order_id.desc())
    ).all()
    return [OrderSummary(**_summary(order, truck_name=truck_name)) for order, truck_name in rows]


def customer_order_details(session: Session, user_id: int, order_id: int) -> OrderDetails:
    order = get_customer_order(session, user_id, order_id)
    truck_name = session.scalar(select(Truck.truck_name).where(Truck.truck_id == order.truck_id))
    return OrderDetails(**_summary(order, truck_name=truck_name), items=_lines(session, order.order_id))


def truck_orders(session: Session, truck_id: int) -> list[OrderSummary]:
    rows = session.execute(
        select(Order, User.name)
        .join(User, User.user_id == Order.user_id)
        .where(Order.truck_id == truck_id)
        .order_by(Order.created_at.desc(), Order.order_id.desc())
    ).all()
    return [OrderSummary(**_summary(order, customer_name=name)) for order, name in rows]


def truck_order_details(session: Session, truck_id: int, order_id: int) -> OrderDetails:
    order = get_truck_order(session, truck_id, order_id)
    customer_name = session.scalar(select(User.name).where(User.user_id == order.user_id))
    return OrderDetails(**_summary(order, customer_name=customer_name), items=_lines(session, order.order_id))
