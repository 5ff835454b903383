"""Jinja2 page routes.

Pages read through the same query functions as the JSON API. Anonymous
visitors to a private page are sent to the login page and users of the
other role to ``/dashboard``.
"""

from pathlib import Path

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates
from sqlalchemy.orm import Session

from identity.api.dependencies import get_optional_user
from identity.session.authentication import CurrentUser
from identity.user.user import UserRole
from ordering.cart.queries import view_cart
from ordering.order.order import next_statuses
from ordering.order.queries import my_orders, truck_orders
from ordering.pickup.slots import PickupPolicy
from shared.database import get_session
from shared.exceptions import ObjectNotFoundError
from vendors.menu.queries import available_menu
from vendors.truck.queries import get_available_truck, get_truck, list_available_trucks

templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))


def campus_time(moment, fmt="%H:%M"):
    """Jinja filter: format a stored UTC time on the campus clock."""
    if moment is None:
        return ""
    return PickupPolicy.from_settings().local(moment).strftime(fmt)


templates.env.filters["campus_time"] = campus_time

router = APIRouter(include_in_schema=False)


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url, status_code=303)


def _gate(current: CurrentUser | None, role: UserRole) -> RedirectResponse | None:
    """Return the redirect for a visitor who may not see a page of ``role``."""
    if current is None:
        return _redirect("/")
    if current.role != role.value:
        return _redirect("/dashboard")
    return None


def _render(request: Request, name: str, current: CurrentUser | None = None, **context):
    context["user"] = current.user if current else None
    return templates.TemplateResponse(request, name, context)


# ---------------------------------------------------------------------------
# Public pages
# ---------------------------------------------------------------------------
@router.get("/")
async def index(request: Request, current: CurrentUser | None = Depends(get_optional_user)):
    return _render(request, "index.html", current)


@router.get("/register")
async def register(request: Request, current: CurrentUser | None = Depends(get_optional_user)):
    return _render(request, "register.html", current)


@router.get("/dashboard")
@router.get("/user/dashboard")
async def dashboard(current: CurrentUser | None = Depends(get_optional_user)):
    if current is None:
        return _redirect("/")
    if current.user.is_truck_owner:
        return _redirect("/vendor/dashboard")
    return _redirect("/customer/dashboard")


# ---------------------------------------------------------------------------
# Customer pages
# ---------------------------------------------------------------------------
@router.get("/customer/dashboard")
async def customer_dashboard(
    request: Request,
    current: CurrentUser | None = Depends(get_optional_user),
    session: Session = Depends(get_session),
):
    if redirect := _gate(current, UserRole.CUSTOMER):
        return redirect
    return _render(
        request,
        "customer_dashboard.html",
        current,
        trucks=list_available_trucks(session),
        orders=my_orders(session, current.user_id)[:5],
    )


@router.get("/trucks")
async def trucks(
    request: Request,
    current: CurrentUser | None = Depends(get_optional_user),
    session: Session = Depends(get_session),
):
    if redirect := _gate(current, UserRole.CUSTOMER):
        return redirect
    return _render(request, "trucks.html", current, trucks=list_available_trucks(session))


@router.get("/trucks/{truck_id}/menu")
async def truck_menu(
    request: Request,
    truck_id: int,
    current: CurrentUser | None = Depends(get_optional_user),
    session: Session = Depends(get_session),
):
    if redirect := _gate(current, UserRole.CUSTOMER):
        return redirect
    try:
        truck = get_available_truck(session, truck_id)
    except ObjectNotFoundError:
        return _redirect("/trucks")
    return _render(
        request,
        "truck_menu.html",
        current,
        truck=truck,
        items=available_menu(session, truck_id),
    )


@router.get("/cart")
async def cart(
    request: Request,
    current: CurrentUser | None = Depends(get_optional_user),
    session: Session = Depends(get_session),
):
    if redirect := _gate(current, UserRole.CUSTOMER):
        return redirect
    cart_view = view_cart(session, current.user_id)
    slots = []
    if cart_view.truck_id is not None:
        truck = get_truck(session, cart_view.truck_id)
        slots = PickupPolicy.from_settings().slots(truck.average_prep_time)
    return _render(request, "cart.html", current, cart=cart_view, slots=slots)


@router.get("/myOrders")
async def orders(
    request: Request,
    current: CurrentUser | None = Depends(get_optional_user),
    session: Session = Depends(get_session),
):
    if redirect := _gate(current, UserRole.CUSTOMER):
        return redirect
    return _render(request, "my_orders.html", current, orders=my_orders(session, current.user_id))


# ---------------------------------------------------------------------------
# Vendor pages
# ---------------------------------------------------------------------------
@router.get("/vendor/dashboard")
@router.get("/vendor/truck")
async def vendor_dashboard(
    request: Request,
    current: CurrentUser | None = Depends(get_optional_user),
    session: Session = Depends(get_session),
):
    if redirect := _gate(current, UserRole.TRUCK_OWNER):
        return redirect
    pending = []
    if current.truck is not None:
        pending = [o for o in truck_orders(session, current.truck_id) if o.order_status in ("pending", "preparing")]
    return _render(request, "vendor_dashboard.html", current, truck=current.truck, orders=pending)


@router.get("/vendor/orders")
async def vendor_orders(
    request: Request,
    current: CurrentUser | None = Depends(get_optional_user),
    session: Session = Depends(get_session),
):
    if redirect := _gate(current, UserRole.TRUCK_OWNER):
        return redirect
    orders = truck_orders(session, current.truck_id) if current.truck else []
    return _render(
        request,
        "vendor_orders.html",
        current,
        truck=current.truck,
        orders=orders,
        next_statuses=next_statuses(),
    )


@router.get("/vendor/menu")
async def vendor_menu(
    request: Request,
    current: CurrentUser | None = Depends(get_optional_user),
    session: Session = Depends(get_session),
):
    if redirect := _gate(current, UserRole.TRUCK_OWNER):
        return redirect
    items = available_menu(session, current.truck_id) if current.truck else []
    return _render(request, "vendor_menu.html", current, truck=current.truck, items=items)
