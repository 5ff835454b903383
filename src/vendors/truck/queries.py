"""Truck read access."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from shared.exceptions import ObjectNotFoundError
from vendors.truck.truck import OrderAvailability, Truck, TruckStatus


def _open_trucks():
    return select(Truck).where(
        Truck.truck_status == TruckStatus.AVAILABLE.value,
        Truck.order_status == OrderAvailability.AVAILABLE.value,
    )


def list_available_trucks(session: Session) -> list[Truck]:
    return list(session.scalars(_open_trucks().order_by(Truck.truck_id)))


def get_available_truck(session: Session, truck_id: int) -> Truck:
    truck = session.scalar(_open_trucks().where(Truck.truck_id == truck_id))
    if truck is None:
        raise ObjectNotFoundError("Truck not found or not available")
    return truck


def get_truck(session: Session, truck_id: int) -> Truck:
    truck = session.get(Truck, truck_id)
    if truck is None:
        raise ObjectNotFoundError("Truck not found")
    return truck
