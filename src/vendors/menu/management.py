"""Commands and handlers for a truck owner's menu."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict
from sqlalchemy.orm import Session

from shared.utils.logging import get_logger
from vendors.menu.menu_item import MenuItem
from vendors.menu.queries import get_owned_item

logger = get_logger(__name__)


class CreateMenuItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    truck_id: int
    name: str | None = None
    price: Decimal | None = None
    category: str | None = None
    description: str | None = None


class EditMenuItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    truck_id: int
    item_id: int
    name: str | None = None
    price: Decimal | None = None
    category: str | None = None
    description: str | None = None


class DeleteMenuItem(BaseModel):
    """Retire an item from the menu; it stays referenced by past orders."""

    model_config = ConfigDict(frozen=True)

    truck_id: int
    item_id: int


def create_menu_item(session: Session, command: CreateMenuItem) -> MenuItem:
    item = MenuItem.create(
        truck_id=command.truck_id,
        name=command.name,
        price=command.price,
        category=command.category,
        description=command.description,
    )
    session.add(item)
    session.flush()
    logger.info("menu_item_created", truck_id=command.truck_id, item_id=item.item_id)
    return item


def edit_menu_item(session: Session, command: EditMenuItem) -> MenuItem:
    item = get_owned_item(session, command.truck_id, command.item_id, action="edit")
    item.edit(
        name=command.name,
        price=command.price,
        category=command.category,
        description=command.description,
    )
    session.flush()
    return item


def delete_menu_item(session: Session, command: DeleteMenuItem) -> MenuItem:
    item = get_owned_item(session, command.truck_id, command.item_id, action="delete")
    item.retire()
    session.flush()
    logger.info("menu_item_retired", truck_id=command.truck_id, item_id=item.item_id)
    return item
