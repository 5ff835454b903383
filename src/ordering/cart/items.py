"""Adding, changing and removing cart lines."""

from pydantic import BaseModel, ConfigDict
from sqlalchemy.orm import Session

from ordering.cart.cart import Cart, CartItem
from shared.exceptions import ObjectNotFoundError, ValidationError
from shared.utils.logging import get_logger
from vendors.menu.queries import get_orderable_item
from vendors.truck.queries import get_truck

logger = get_logger(__name__)


class AddToCart(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: int
    item_id: int | None = None
    quantity: int | None = None


class UpdateCartQuantity(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: int
    cart_id: int
    quantity: int | None = None


class RemoveFromCart(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: int
    cart_id: int


def _owned_row(cart: Cart, cart_id: int, action: str) -> CartItem:
    cart_item = cart.find(cart_id)
    if cart_item is None:
        raise ObjectNotFoundError(f"Cart item not found or you do not have permission to {action} it")
    return cart_item


def add_to_cart(session: Session, command: AddToCart) -> CartItem:
    if command.item_id is None or command.quantity is None:
        raise ValidationError({"cart": ["itemId and quantity are required"]})

    menu_item = get_orderable_item(session, command.item_id)
    truck = get_truck(session, menu_item.truck_id)
    if not truck.accepts_orders:
        raise ValidationError({"truck": ["This truck is not currently accepting orders"]})

    cart = Cart.for_user(session, command.user_id)
    cart_item = cart.add_item(menu_item, command.quantity)
    session.flush()

    logger.info(
        "cart_item_added",
        user_id=command.user_id,
        item_id=menu_item.item_id,
        quantity=cart_item.quantity,
    )
    return cart_item


def update_cart_quantity(session: Session, command: UpdateCartQuantity) -> CartItem:
    cart = Cart.for_user(session, command.user_id)
    cart_item = _owned_row(cart, command.cart_id, "edit")
    cart.update_quantity(cart_item, command.quantity)
    session.flush()
    return cart_item


def remove_from_cart(session: Session, command: RemoveFromCart) -> None:
    cart = Cart.for_user(session, command.user_id)
    cart_item = _owned_row(cart, command.cart_id, "delete")
    cart.remove_item(cart_item)
    session.flush()
