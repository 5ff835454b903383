import pytest

from shared.exceptions import ObjectNotFoundError, ValidationError
from vendors.truck.management import UpdateTruck, UpdateTruckOrderStatus, update_truck, update_truck_order_status
from vendors.truck.queries import get_available_truck, list_available_trucks


class TestTruckListing:
    def test_lists_only_open_trucks(self, db_session, register, owned_truck):
        open_truck = owned_truck(register(role="truckOwner"))
        paused = owned_truck(register(role="truckOwner"))
        update_truck_order_status(
            db_session, UpdateTruckOrderStatus(truck_id=paused.truck_id, order_status="unavailable")
        )

        assert [t.truck_id for t in list_available_trucks(db_session)] == [open_truck.truck_id]

    def test_paused_truck_is_not_available(self, db_session, register, owned_truck):
        truck = owned_truck(register(role="truckOwner"))
        update_truck_order_status(
            db_session, UpdateTruckOrderStatus(truck_id=truck.truck_id, order_status="unavailable")
        )
        with pytest.raises(ObjectNotFoundError) as exc:
            get_available_truck(db_session, truck.truck_id)
        assert exc.value.message == "Truck not found or not available"


class TestTruckUpdates:
    def test_invalid_order_status(self, db_session, register, owned_truck):
        truck = owned_truck(register(role="truckOwner"))
        with pytest.raises(ValidationError):
            update_truck_order_status(db_session, UpdateTruckOrderStatus(truck_id=truck.truck_id, order_status=None))

    def test_update_details(self, db_session, register, owned_truck):
        truck = owned_truck(register(role="truckOwner"))
        updated = update_truck(
            db_session, UpdateTruck(truck_id=truck.truck_id, truck_name="Koshary Corner", average_prep_time=25)
        )
        assert updated.truck_name == "Koshary Corner"
        assert updated.average_prep_time == 25
