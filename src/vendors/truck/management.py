"""Commands and handlers for a truck owner's own truck."""

from pydantic import BaseModel, ConfigDict
from sqlalchemy.orm import Session

from shared.utils.logging import get_logger
from vendors.truck.queries import get_truck
from vendors.truck.truck import Truck

logger = get_logger(__name__)


class UpdateTruckOrderStatus(BaseModel):
    """Open or close a truck for new orders."""

    model_config = ConfigDict(frozen=True)

    truck_id: int
    order_status: str | None = None


class UpdateTruck(BaseModel):
    model_config = ConfigDict(frozen=True)

    truck_id: int
    truck_name: str | None = None
    truck_logo: str | None = None
    truck_status: str | None = None
    average_prep_time: int | None = None


def update_truck_order_status(session: Session, command: UpdateTruckOrderStatus) -> Truck:
    truck = get_truck(session, command.truck_id)
    truck.set_order_status(command.order_status)
    session.flush()
    logger.info("truck_order_status_changed", truck_id=truck.truck_id, order_status=truck.order_status)
    return truck


def update_truck(session: Session, command: UpdateTruck) -> Truck:
    truck = get_truck(session, command.truck_id)
    truck.update_details(
        truck_name=command.truck_name,
        truck_logo=command.truck_logo,
        truck_status=command.truck_status,
        average_prep_time=command.average_prep_time,
    )
    session.flush()
    return truck
