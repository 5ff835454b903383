import os
from datetime import UTC, datetime
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Select the configuration overlay before anything reads the settings.
    """
    os.environ["APP_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            # Integration tests are often slower
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session", autouse=True)
def setup_db():
    from shared.utils.db import drop_db, setup_db

    setup_db()

    yield

    drop_db()


@pytest.fixture(autouse=True)
def run_around_tests():
    """Fixture to automatically cleanup the database after every test"""
    yield

    from shared.utils.db import reset_db
    from shared.utils.logging import clear_context

    reset_db()
    clear_context()


# A Monday lunchtime, comfortably inside ordering hours
LUNCHTIME = datetime(2026, 10, 19, 12, 0, tzinfo=UTC)


@pytest.fixture()
def frozen_now(monkeypatch):
    """Pin ``clock.now()``; call the returned function to move the clock."""
    from shared import clock

    current = {"now": LUNCHTIME}
    monkeypatch.setattr(clock, "now", lambda: current["now"])

    def set_now(value):
        current["now"] = value

    return set_now


@pytest.fixture()
def campus_timezone(monkeypatch):
    """Run the app on another campus clock; call with a zone name."""
    from shared.config import get_settings

    def set_timezone(name):
        monkeypatch.setenv("CAMPUS_TIMEZONE", name)
        get_settings.cache_clear()

    yield set_timezone

    get_settings.cache_clear()


@pytest.fixture()
def db_session():
    from shared.database import SessionFactory, get_engine

    get_engine()
    session = SessionFactory()
    yield session
    session.rollback()
    session.close()


@pytest.fixture()
def register(db_session):
    """Create an account directly through the registration handler."""
    from identity.user.registration import RegisterUser, register_user

    counter = {"n": 0}

    def _register(role="customer", name=None, email=None, password="secret-pass"):
        counter["n"] += 1
        n = counter["n"]
        return register_user(
            db_session,
            RegisterUser(
                name=name or f"User {n}",
                email=email or f"user{n}@campus.edu",
                password=password,
                role=role,
            ),
        )

    return _register


@pytest.fixture()
def owned_truck(db_session):
    """Look up the truck that registration opened for an owner."""
    from sqlalchemy import select

    from vendors.truck.truck import Truck

    def _owned_truck(owner):
        return db_session.scalar(select(Truck).where(Truck.owner_id == owner.user_id))

    return _owned_truck


@pytest.fixture()
def add_menu_item(db_session):
    from vendors.menu.management import CreateMenuItem, create_menu_item

    def _add(truck_id, name="Falafel Wrap", price="4.50", category="Sandwiches"):
        return create_menu_item(
            db_session,
            CreateMenuItem(truck_id=truck_id, name=name, price=price, category=category),
        )

    return _add


@pytest.fixture()
def client():
    from fastapi.testclient import TestClient

    from app import app

    return TestClient(app)


@pytest.fixture()
def api():
    """Helpers that drive the HTTP API with separate cookie jars per user."""
    from fastapi.testclient import TestClient

    from app import app

    class Api:
        def client(self):
            return TestClient(app)

        def signup(self, role="customer", name="Sam", email="sam@campus.edu", password="secret-pass"):
            http = TestClient(app)
            response = http.post(
                "/api/v1/user",
                json={"name": name, "email": email, "password": password, "role": role},
            )
            assert response.status_code == 201, response.text
            response = http.post("/api/v1/user/login", json={"email": email, "password": password})
            assert response.status_code == 200, response.text
            return http

        def owner_with_item(self, name="Rosa", email="rosa@campus.edu", item_name="Tacos", price=6.0):
            owner = self.signup("truckOwner", name=name, email=email)
            truck = owner.get("/api/v1/trucks/myTruck").json()
            response = owner.post(
                "/api/v1/menuItem/new",
                json={"name": item_name, "price": price, "category": "Mains"},
            )
            assert response.status_code == 200, response.text
            return owner, truck["truckId"], response.json()["itemId"]

    return Api()
