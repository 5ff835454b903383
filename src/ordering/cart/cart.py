"""Shopping cart — a customer's staging area before an order is placed.

A cart is not a table of its own: it is the set of ``carts`` rows belonging
to one user. All rows of a cart must come from the same truck.

Business Rules:
- Quantities are between 1 and 99 per row
- Adding an item already in the cart increases that row's quantity
- The unit price is captured from the menu item when the row is created
"""

from decimal import Decimal

from sqlalchemy import ForeignKey, Integer, Numeric, select
from sqlalchemy.orm import Mapped, Session, mapped_column

from shared.database import Base
from shared.exceptions import ValidationError
from vendors.menu.menu_item import MenuItem


MAX_QUANTITY = 99


def _validate_quantity(quantity):
    if quantity is None or isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise ValidationError({"quantity": ["Valid quantity is required"]})
    if quantity > MAX_QUANTITY:
        raise ValidationError({"quantity": [f"Quantity cannot exceed {MAX_QUANTITY}"]})


class CartItem(Base):
    __tablename__ = "carts"

    cart_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True
    )
    item_id: Mapped[int] = mapped_column(
        ForeignKey("menu_items.item_id", ondelete="CASCADE"), nullable=False
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity


class Cart:
    """All cart rows of one user, loaded together with their menu items."""

    def __init__(self, session: Session, user_id: int, lines: list[tuple[CartItem, MenuItem]]):
        self._session = session
        self.user_id = user_id
        self._lines = lines

    @classmethod
    def for_user(cls, session: Session, user_id: int) -> "Cart":
        rows = session.execute(
            select(CartItem, MenuItem)
            .join(MenuItem, MenuItem.item_id == CartItem.item_id)
            .where(CartItem.user_id == user_id)
            .order_by(CartItem.cart_id)
        ).all()
        return cls(session, user_id, [(row.CartItem, row.MenuItem) for row in rows])

    # -------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------
    @property
    def lines(self) -> list[tuple[CartItem, MenuItem]]:
        return list(self._lines)

    @property
    def items(self) -> list[CartItem]:
        return [cart_item for cart_item, _ in self._lines]

    @property
    def is_empty(self) -> bool:
        return not self._lines

    @property
    def truck_ids(self) -> set[int]:
        return {menu_item.truck_id for _, menu_item in self._lines}

    @property
    def truck_id(self) -> int | None:
        """The truck every row belongs to, or ``None`` for an empty cart."""
        if not self._lines:
            return None
        return self._lines[0][1].truck_id

    @property
    def total(self) -> Decimal:
        return sum((cart_item.line_total for cart_item, _ in self._lines), Decimal("0.00"))

    def find(self, cart_id: int) -> CartItem | None:
        for cart_item, _ in self._lines:
            if cart_item.cart_id == cart_id:
                return cart_item
        return None

    # -------------------------------------------------------------------
    # Behaviour
    # -------------------------------------------------------------------
    def add_item(self, menu_item: MenuItem, quantity: int) -> CartItem:
        _validate_quantity(quantity)

        truck_id = self.truck_id
        if truck_id is not None and truck_id != menu_item.truck_id:
            raise ValidationError({"cart": ["Cannot order from multiple trucks"]})

        for cart_item, existing in self._lines:
            if existing.item_id == menu_item.item_id:
                _validate_quantity(cart_item.quantity + quantity)
                cart_item.quantity += quantity
                return cart_item

        cart_item = CartItem(
            user_id=self.user_id,
            item_id=menu_item.item_id,
            quantity=quantity,
            price=menu_item.price,
        )
        self._session.add(cart_item)
        self._lines.append((cart_item, menu_item))
        return cart_item

    def update_quantity(self, cart_item: CartItem, quantity: int) -> CartItem:
        _validate_quantity(quantity)
        cart_item.quantity = quantity
        return cart_item

    def remove_item(self, cart_item: CartItem) -> None:
        self._session.delete(cart_item)
        self._lines = [line for line in self._lines if line[0] is not cart_item]

    def clear(self) -> None:
        for cart_item, _ in self._lines:
            self._session.delete(cart_item)
        self._lines = []
