"""MenuItem — a dish a truck sells.

Deleting an item only retires it (``status = unavailable``); order history
keeps pointing at the row.
"""

from datetime import datetime
from decimal import Decimal, InvalidOperation
from enum import Enum

from sqlalchemy import ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from shared import clock
from shared.database import Base, UtcDateTime
from shared.exceptions import ValidationError

_CENT = Decimal("0.01")
MAX_PRICE = Decimal("9999.99")


class MenuItemStatus(Enum):
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"


def parse_price(value) -> Decimal:
    """Coerce a price to a positive two-place decimal no larger than ``MAX_PRICE``."""
    try:
        price = Decimal(str(value)).quantize(_CENT)
    except (InvalidOperation, ValueError):
        raise ValidationError({"price": ["Price must be a number"]}) from None
    if not price.is_finite():
        raise ValidationError({"price": ["Price must be a number"]})
    if price <= 0:
        raise ValidationError({"price": ["Price must be greater than zero"]})
    if price > MAX_PRICE:
        raise ValidationError({"price": [f"Price cannot exceed {MAX_PRICE}"]})
    return price


class MenuItem(Base):
    __tablename__ = "menu_items"

    item_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    truck_id: Mapped[int] = mapped_column(
        ForeignKey("trucks.truck_id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default=MenuItemStatus.AVAILABLE.value)
    created_at: Mapped[datetime] = mapped_column(UtcDateTime, nullable=False)

    @classmethod
    def create(cls, truck_id, name, price, category, description=None):
        name = (name or "").strip()
        category = (category or "").strip()
        if not name or price is None or price == "" or not category:
            raise ValidationError({"menu_item": ["Name, price, and category are required"]})

        return cls(
            truck_id=truck_id,
            name=name,
            price=parse_price(price),
            category=category,
            description=description or None,
            status=MenuItemStatus.AVAILABLE.value,
            created_at=clock.now(),
        )

    @property
    def is_available(self) -> bool:
        return self.status == MenuItemStatus.AVAILABLE.value

    def edit(self, name=None, price=None, category=None, description=None):
        """Apply a partial update; ``None`` leaves a field unchanged."""
        if name is not None:
            name = name.strip()
            if not name:
                raise ValidationError({"name": ["Name cannot be empty"]})
            self.name = name

        if price is not None:
            self.price = parse_price(price)

        if category is not None:
            category = category.strip()
            if not category:
                raise ValidationError({"category": ["Category cannot be empty"]})
            self.category = category

        if description is not None:
            self.description = description or None

    def retire(self):
        self.status = MenuItemStatus.UNAVAILABLE.value
