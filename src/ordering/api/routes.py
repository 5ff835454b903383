"""FastAPI routes for the Ordering domain — carts, orders and pickup slots."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from identity.api.dependencies import require_customer, require_truck_owner
from identity.session.authentication import CurrentUser
from ordering.api.schemas import (
    AddToCartRequest,
    CartItemAddedResponse,
    CartResponse,
    DelayPickupRequest,
    OrderDetailsResponse,
    OrderPlacedResponse,
    OrderSummaryResponse,
    PickupSlotsResponse,
    PlaceOrderRequest,
    UpdateCartQuantityRequest,
    UpdateOrderStatusRequest,
)
from ordering.cart.items import (
    AddToCart,
    RemoveFromCart,
    UpdateCartQuantity,
    add_to_cart,
    remove_from_cart,
    update_cart_quantity,
)
from ordering.cart.queries import view_cart
from ordering.order.placement import PlaceOrder, place_order
from ordering.order.queries import (
    customer_order_details,
    my_orders,
    truck_order_details,
    truck_orders,
)
from ordering.order.status import (
    CancelOrder,
    DelayPickup,
    UpdateOrderStatus,
    cancel_order,
    delay_pickup,
    update_order_status,
)
from ordering.pickup.slots import PickupPolicy
from shared.database import get_session
from shared.schemas import MessageResponse
from vendors.truck.queries import get_available_truck

# ---------------------------------------------------------------------------
# Cart Router
# ---------------------------------------------------------------------------
cart_router = APIRouter(prefix="/api/v1/cart", tags=["cart"])


@cart_router.post("/new", response_model=CartItemAddedResponse)
async def add_cart_item(
    body: AddToCartRequest,
    current: CurrentUser = Depends(require_customer("Only customers can add items to cart")),
    session: Session = Depends(get_session),
) -> CartItemAddedResponse:
    command = AddToCart(user_id=current.user_id, item_id=body.item_id, quantity=body.quantity)
    cart_item = add_to_cart(session, command)
    return CartItemAddedResponse(cart_id=cart_item.cart_id, quantity=cart_item.quantity)


@cart_router.get("/view", response_model=CartResponse)
async def get_cart(
    current: CurrentUser = Depends(require_customer("Only customers can view cart")),
    session: Session = Depends(get_session),
):
    return view_cart(session, current.user_id)


@cart_router.put("/edit/{cart_id}", response_model=MessageResponse)
async def edit_cart_item(
    cart_id: int,
    body: UpdateCartQuantityRequest,
    current: CurrentUser = Depends(require_customer("Only customers can edit cart")),
    session: Session = Depends(get_session),
) -> MessageResponse:
    command = UpdateCartQuantity(user_id=current.user_id, cart_id=cart_id, quantity=body.quantity)
    update_cart_quantity(session, command)
    return MessageResponse(message="cart updated successfully")


@cart_router.delete("/delete/{cart_id}", response_model=MessageResponse)
async def delete_cart_item(
    cart_id: int,
    current: CurrentUser = Depends(require_customer("Only customers can delete cart items")),
    session: Session = Depends(get_session),
) -> MessageResponse:
    remove_from_cart(session, RemoveFromCart(user_id=current.user_id, cart_id=cart_id))
    return MessageResponse(message="item removed from cart successfully")


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/api/v1/order", tags=["orders"])


@order_router.post("/new", response_model=OrderPlacedResponse)
async def new_order(
    body: PlaceOrderRequest,
    current: CurrentUser = Depends(require_customer("Only customers can place orders")),
    session: Session = Depends(get_session),
) -> OrderPlacedResponse:
    command = PlaceOrder(user_id=current.user_id, scheduled_pickup_time=body.scheduled_pickup_time)
    order = place_order(session, command)
    return OrderPlacedResponse(order_id=order.order_id)


@order_router.get("/myOrders", response_model=list[OrderSummaryResponse])
async def get_my_orders(
    current: CurrentUser = Depends(require_customer("Only customers can view their orders")),
    session: Session = Depends(get_session),
):
    return my_orders(session, current.user_id)


@order_router.get("/details/{order_id}", response_model=OrderDetailsResponse)
async def get_order_details(
    order_id: int,
    current: CurrentUser = Depends(require_customer("Only customers can view order details")),
    session: Session = Depends(get_session),
):
    return customer_order_details(session, current.user_id, order_id)


@order_router.put("/cancel/{order_id}", response_model=MessageResponse)
async def cancel_my_order(
    order_id: int,
    current: CurrentUser = Depends(require_customer("Only customers can cancel their orders")),
    session: Session = Depends(get_session),
) -> MessageResponse:
    cancel_order(session, CancelOrder(user_id=current.user_id, order_id=order_id))
    return MessageResponse(message="order cancelled successfully")


@order_router.put("/delay/{order_id}", response_model=MessageResponse)
async def delay_my_order(
    order_id: int,
    body: DelayPickupRequest,
    current: CurrentUser = Depends(require_customer("Only customers can delay their orders")),
    session: Session = Depends(get_session),
) -> MessageResponse:
    command = DelayPickup(user_id=current.user_id, order_id=order_id, scheduled_pickup_time=body.scheduled_pickup_time)
    delay_pickup(session, command)
    return MessageResponse(message="order pickup time updated successfully")


@order_router.get("/truckOrders", response_model=list[OrderSummaryResponse])
async def get_truck_orders(
    current: CurrentUser = Depends(require_truck_owner("Only truck owners can view truck orders")),
    session: Session = Depends(get_session),
):
    return truck_orders(session, current.truck_id)


@order_router.put("/updateStatus/{order_id}", response_model=MessageResponse)
async def change_order_status(
    order_id: int,
    body: UpdateOrderStatusRequest,
    current: CurrentUser = Depends(require_truck_owner("Only truck owners can update order status")),
    session: Session = Depends(get_session),
) -> MessageResponse:
    command = UpdateOrderStatus(
        truck_id=current.truck_id,
        order_id=order_id,
        order_status=body.order_status,
        estimated_earliest_pickup=body.estimated_earliest_pickup,
    )
    update_order_status(session, command)
    return MessageResponse(message="order status updated successfully")


@order_router.get("/truckOwner/{order_id}", response_model=OrderDetailsResponse)
async def get_truck_order_details(
    order_id: int,
    current: CurrentUser = Depends(require_truck_owner("Only truck owners can view order details")),
    session: Session = Depends(get_session),
):
    return truck_order_details(session, current.truck_id, order_id)


# ---------------------------------------------------------------------------
# Pickup Router
# ---------------------------------------------------------------------------
pickup_router = APIRouter(prefix="/api/v1/trucks", tags=["pickup"])


@pickup_router.get("/{truck_id}/pickupSlots", response_model=PickupSlotsResponse)
async def pickup_slots(truck_id: int, session: Session = Depends(get_session)) -> PickupSlotsResponse:
    truck = get_available_truck(session, truck_id)
    policy = PickupPolicy.from_settings()
    window = policy.window_for(truck.average_prep_time)
    return PickupSlotsResponse(
        truck_id=truck.truck_id,
        ordering_open=window is not None,
        earliest=window.earliest if window else None,
        latest=window.latest if window else None,
        slots=policy.slots(truck.average_prep_time),
    )
