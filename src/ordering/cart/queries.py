"""Read side of the cart."""

from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.orm import Session

from ordering.cart.cart import Cart


@dataclass(frozen=True)
class CartLine:
    cart_id: int
    item_id: int
    name: str
    price: Decimal
    quantity: int
    line_total: Decimal


@dataclass(frozen=True)
class CartView:
    truck_id: int | None
    items: list[CartLine]
    total: Decimal


def view_cart(session: Session, user_id: int) -> CartView:
    cart = Cart.for_user(session, user_id)
    lines = [
        CartLine(
            cart_id=cart_item.cart_id,
            item_id=cart_item.item_id,
            name=menu_item.name,
            price=cart_item.price,
            quantity=cart_item.quantity,
            line_total=cart_item.line_total,
        )
        for cart_item, menu_item in cart.lines
    ]
    return CartView(truck_id=cart.truck_id, items=lines, total=cart.total)
