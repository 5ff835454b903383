"""Pydantic request/response schemas for the Vendors API."""

from datetime import datetime
from decimal import Decimal

from pydantic import Field

from shared.schemas import CamelModel, Money

# ---------------------------------------------------------------------------
# Truck Schemas
# ---------------------------------------------------------------------------


class TruckResponse(CamelModel):
    truck_id: int
    truck_name: str
    truck_logo: str | None = None
    owner_id: int
    truck_status: str
    order_status: str
    average_prep_time: int
    created_at: datetime


class UpdateTruckOrderStatusRequest(CamelModel):
    order_status: str | None = None


class UpdateTruckRequest(CamelModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"truckName": "Koshary Corner", "truckStatus": "available", "averagePrepTime": 20}]
        }
    }

    truck_name: str | None = Field(None, max_length=100)
    truck_logo: str | None = Field(None, max_length=500)
    truck_status: str | None = None
    average_prep_time: int | None = None


# ---------------------------------------------------------------------------
# Menu Schemas
# ---------------------------------------------------------------------------


class MenuItemResponse(CamelModel):
    item_id: int
    truck_id: int
    name: str
    description: str | None = None
    price: Money
    category: str
    status: str
    created_at: datetime


class CreateMenuItemRequest(CamelModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {"name": "Falafel Wrap", "price": 4.5, "category": "Sandwiches", "description": "With tahini"}
            ]
        }
    }

    name: str | None = Field(None, max_length=100)
    price: Decimal | None = None
    category: str | None = Field(None, max_length=50)
    description: str | None = None


class EditMenuItemRequest(CreateMenuItemRequest):
    pass


class MenuItemCreatedResponse(CamelModel):
    message: str = "menu item was created successfully"
    item_id: int
