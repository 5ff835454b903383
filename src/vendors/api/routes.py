"""FastAPI routes for the Vendors domain — trucks and menus."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from identity.api.dependencies import require_customer, require_truck_owner
from identity.session.authentication import CurrentUser
from shared.database import get_session
from shared.schemas import MessageResponse
from vendors.api.schemas import (
    CreateMenuItemRequest,
    EditMenuItemRequest,
    MenuItemCreatedResponse,
    MenuItemResponse,
    TruckResponse,
    UpdateTruckOrderStatusRequest,
    UpdateTruckRequest,
)
from vendors.menu.management import (
    CreateMenuItem,
    DeleteMenuItem,
    EditMenuItem,
    create_menu_item,
    delete_menu_item,
    edit_menu_item,
)
from vendors.menu.queries import available_menu, get_owned_item
from vendors.truck.management import (
    UpdateTruck,
    UpdateTruckOrderStatus,
    update_truck,
    update_truck_order_status,
)
from vendors.truck.queries import get_available_truck, get_truck, list_available_trucks

# ---------------------------------------------------------------------------
# Truck Router
# ---------------------------------------------------------------------------
truck_router = APIRouter(prefix="/api/v1/trucks", tags=["trucks"])


@truck_router.get("/public", response_model=list[TruckResponse])
async def public_trucks(session: Session = Depends(get_session)):
    return list_available_trucks(session)


@truck_router.get("/view", response_model=list[TruckResponse])
async def view_trucks(
    current: CurrentUser = Depends(require_customer("Only customers can view available trucks")),
    session: Session = Depends(get_session),
):
    return list_available_trucks(session)


@truck_router.get("/myTruck", response_model=TruckResponse)
async def my_truck(
    current: CurrentUser = Depends(require_truck_owner("Only truck owners can view truck information")),
    session: Session = Depends(get_session),
):
    return get_truck(session, current.truck_id)


@truck_router.put("/myTruck", response_model=TruckResponse)
async def update_my_truck(
    body: UpdateTruckRequest,
    current: CurrentUser = Depends(require_truck_owner("Only truck owners can update truck information")),
    session: Session = Depends(get_session),
):
    command = UpdateTruck(
        truck_id=current.truck_id,
        truck_name=body.truck_name,
        truck_logo=body.truck_logo,
        truck_status=body.truck_status,
        average_prep_time=body.average_prep_time,
    )
    return update_truck(session, command)


@truck_router.put("/updateOrderStatus", response_model=MessageResponse)
async def update_order_status(
    body: UpdateTruckOrderStatusRequest,
    current: CurrentUser = Depends(require_truck_owner("Only truck owners can update order status")),
    session: Session = Depends(get_session),
) -> MessageResponse:
    command = UpdateTruckOrderStatus(truck_id=current.truck_id, order_status=body.order_status)
    update_truck_order_status(session, command)
    return MessageResponse(message="truck order status updated successfully")


# ---------------------------------------------------------------------------
# Menu Router
# ---------------------------------------------------------------------------
menu_router = APIRouter(prefix="/api/v1/menuItem", tags=["menu"])


@menu_router.post("/new", response_model=MenuItemCreatedResponse)
async def new_menu_item(
    body: CreateMenuItemRequest,
    current: CurrentUser = Depends(require_truck_owner("Only truck owners can create menu items")),
    session: Session = Depends(get_session),
) -> MenuItemCreatedResponse:
    command = CreateMenuItem(
        truck_id=current.truck_id,
        name=body.name,
        price=body.price,
        category=body.category,
        description=body.description,
    )
    item = create_menu_item(session, command)
    return MenuItemCreatedResponse(item_id=item.item_id)


@menu_router.get("/view", response_model=list[MenuItemResponse])
async def view_my_menu(
    current: CurrentUser = Depends(require_truck_owner("Only truck owners can view their menu items")),
    session: Session = Depends(get_session),
):
    return available_menu(session, current.truck_id)


@menu_router.get("/view/{item_id}", response_model=MenuItemResponse)
async def view_my_menu_item(
    item_id: int,
    current: CurrentUser = Depends(require_truck_owner("Only truck owners can view menu items")),
    session: Session = Depends(get_session),
):
    return get_owned_item(session, current.truck_id, item_id)


@menu_router.put("/edit/{item_id}", response_model=MessageResponse)
async def edit_my_menu_item(
    item_id: int,
    body: EditMenuItemRequest,
    current: CurrentUser = Depends(require_truck_owner("Only truck owners can edit menu items")),
    session: Session = Depends(get_session),
) -> MessageResponse:
    command = EditMenuItem(
        truck_id=current.truck_id,
        item_id=item_id,
        name=body.name,
        price=body.price,
        category=body.category,
        description=body.description,
    )
    edit_menu_item(session, command)
    return MessageResponse(message="menu item updated successfully")


@menu_router.delete("/delete/{item_id}", response_model=MessageResponse)
async def delete_my_menu_item(
    item_id: int,
    current: CurrentUser = Depends(require_truck_owner("Only truck owners can delete menu items")),
    session: Session = Depends(get_session),
) -> MessageResponse:
    delete_menu_item(session, DeleteMenuItem(truck_id=current.truck_id, item_id=item_id))
    return MessageResponse(message="menu item deleted successfully")


@menu_router.get("/truck/{truck_id}/public", response_model=list[MenuItemResponse])
async def public_truck_menu(truck_id: int, session: Session = Depends(get_session)):
    get_available_truck(session, truck_id)
    return available_menu(session, truck_id)


@menu_router.get("/truck/{truck_id}", response_model=list[MenuItemResponse])
async def truck_menu(
    truck_id: int,
    current: CurrentUser = Depends(require_customer("Only customers can view truck menus")),
    session: Session = Depends(get_session),
):
    return available_menu(session, truck_id)


@menu_router.get("/truck/{truck_id}/category/{category}", response_model=list[MenuItemResponse])
async def truck_menu_by_category(
    truck_id: int,
    category: str,
    current: CurrentUser = Depends(require_customer("Only customers can search menu items")),
    session: Session = Depends(get_session),
):
    return available_menu(session, truck_id, category=category)
