"""Pydantic request/response schemas for the Ordering API."""

from datetime import datetime

from pydantic import Field

from shared.schemas import CamelModel, Money

# ---------------------------------------------------------------------------
# Cart Schemas
# ---------------------------------------------------------------------------


class AddToCartRequest(CamelModel):
    model_config = {"json_schema_extra": {"examples": [{"itemId": 3, "quantity": 2}]}}

    item_id: int | None = None
    quantity: int | None = None


class UpdateCartQuantityRequest(CamelModel):
    quantity: int | None = None


class CartItemAddedResponse(CamelModel):
    message: str = "item added to cart successfully"
    cart_id: int
    quantity: int


class CartLineResponse(CamelModel):
    cart_id: int
    item_id: int
    name: str
    price: Money
    quantity: int
    line_total: Money


class CartResponse(CamelModel):
    truck_id: int | None = None
    items: list[CartLineResponse] = Field(default_factory=list)
    total: Money


# ---------------------------------------------------------------------------
# Order Schemas
# ---------------------------------------------------------------------------


class PlaceOrderRequest(CamelModel):
    model_config = {"json_schema_extra": {"examples": [{"scheduledPickupTime": "2026-10-19T12:30:00"}]}}

    scheduled_pickup_time: datetime | None = None


class DelayPickupRequest(CamelModel):
    model_config = {"json_schema_extra": {"examples": [{"scheduledPickupTime": "2026-10-19T13:15:00"}]}}

    scheduled_pickup_time: datetime | None = None


class UpdateOrderStatusRequest(CamelModel):
    order_status: str | None = None
    estimated_earliest_pickup: datetime | None = None


class OrderPlacedResponse(CamelModel):
    message: str = "order placed successfully"
    order_id: int


class OrderLineResponse(CamelModel):
    order_item_id: int
    item_id: int
    item_name: str
    quantity: int
    price: Money


class OrderSummaryResponse(CamelModel):
    order_id: int
    user_id: int
    truck_id: int
    order_status: str
    total_price: Money
    scheduled_pickup_time: datetime
    estimated_earliest_pickup: datetime | None = None
    created_at: datetime
    truck_name: str | None = None
    customer_name: str | None = None


class OrderDetailsResponse(OrderSummaryResponse):
    items: list[OrderLineResponse] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Pickup Schemas
# ---------------------------------------------------------------------------


class PickupSlotsResponse(CamelModel):
    truck_id: int
    ordering_open: bool
    earliest: datetime | None = None
    latest: datetime | None = None
    slots: list[datetime] = Field(default_factory=list)
