"""Menu read access for customers and truck owners."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from shared.exceptions import ObjectNotFoundError
from vendors.menu.menu_item import MenuItem, MenuItemStatus


def available_menu(session: Session, truck_id: int, category: str | None = None) -> list[MenuItem]:
    query = select(MenuItem).where(
        MenuItem.truck_id == truck_id,
        MenuItem.status == MenuItemStatus.AVAILABLE.value,
    )
    if category is not None:
        query = query.where(MenuItem.category == category)
    return list(session.scalars(query.order_by(MenuItem.item_id)))


def get_owned_item(session: Session, truck_id: int, item_id: int, action: str = "view") -> MenuItem:
    """Fetch an item of the given truck; someone else's item counts as missing."""
    item = session.scalar(select(MenuItem).where(MenuItem.item_id == item_id, MenuItem.truck_id == truck_id))
    if item is None:
        raise ObjectNotFoundError(f"Menu item not found or you do not have permission to {action} it")
    return item


def get_orderable_item(session: Session, item_id: int) -> MenuItem:
    item = session.scalar(
        select(MenuItem).where(MenuItem.item_id == item_id, MenuItem.status == MenuItemStatus.AVAILABLE.value)
    )
    if item is None:
        raise ObjectNotFoundError("Menu item not available")
    return item
