import pytest

from shared.exceptions import ValidationError
from vendors.truck.truck import DEFAULT_PREP_TIME, MAX_PREP_TIME, Truck


def _truck(**overrides):
    truck = Truck.create_for_owner(owner_id=1, owner_name="Rosa")
    for field, value in overrides.items():
        setattr(truck, field, value)
    return truck


class TestTruckCreation:
    def test_named_after_owner(self):
        truck = _truck()
        assert truck.truck_name == "Rosa's Food Truck"
        assert truck.average_prep_time == DEFAULT_PREP_TIME

    def test_open_for_orders(self):
        assert _truck().accepts_orders


class TestTruckAvailability:
    def test_paused_truck_does_not_accept_orders(self):
        truck = _truck()
        truck.set_order_status("unavailable")
        assert not truck.accepts_orders

    def test_closed_truck_does_not_accept_orders(self):
        assert not _truck(truck_status="unavailable").accepts_orders

    def test_invalid_order_status(self):
        with pytest.raises(ValidationError) as exc:
            _truck().set_order_status("busy")
        assert exc.value.message == "Valid orderStatus (available/unavailable) is required"


class TestTruckDetails:
    def test_partial_update(self):
        truck = _truck()
        truck.update_details(truck_name="  Koshary Corner ", average_prep_time=20)
        assert truck.truck_name == "Koshary Corner"
        assert truck.average_prep_time == 20
        assert truck.truck_status == "available"

    def test_blank_name_rejected(self):
        with pytest.raises(ValidationError):
            _truck().update_details(truck_name="   ")

    def test_empty_logo_clears_it(self):
        truck = _truck(truck_logo="https://img.example/logo.png")
        truck.update_details(truck_logo="")
        assert truck.truck_logo is None

    @pytest.mark.parametrize("minutes", [0, MAX_PREP_TIME + 1])
    def test_prep_time_bounds(self, minutes):
        with pytest.raises(ValidationError):
            _truck().update_details(average_prep_time=minutes)

    def test_invalid_truck_status(self):
        with pytest.raises(ValidationError):
            _truck().update_details(truck_status="open")
