"""Vendors domain API package."""

from vendors.api.routes import menu_router, truck_router

__all__ = ["truck_router", "menu_router"]
