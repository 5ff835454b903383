import pytest


@pytest.fixture()
def shop(db_session, register, owned_truck, add_menu_item):
    """A customer and one truck with two menu items."""
    owner = register(role="truckOwner", name="Rosa")
    truck = owned_truck(owner)

    class Shop:
        pass

    shop = Shop()
    shop.owner = owner
    shop.truck = truck
    shop.customer = register(name="Nour")
    shop.tacos = add_menu_item(truck.truck_id, name="Tacos", price="6.00", category="Mains")
    shop.horchata = add_menu_item(truck.truck_id, name="Horchata", price="2.50", category="Drinks")
    return shop
