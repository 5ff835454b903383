"""Request dependencies that resolve the acting user from the session cookie."""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from identity.session.authentication import CurrentUser, resolve_session
from identity.user.user import UserRole
from shared.database import get_session
from shared.exceptions import AuthenticationError
from shared.utils.logging import bind_user

SESSION_COOKIE = "session_token"


async def get_current_user(request: Request, session: Session = Depends(get_session)) -> CurrentUser:
    current = resolve_session(session, request.cookies.get(SESSION_COOKIE))
    bind_user(current.user_id, current.role)
    return current


async def get_optional_user(request: Request, session: Session = Depends(get_session)) -> CurrentUser | None:
    """Like ``get_current_user`` but yields ``None`` for anonymous visitors."""
    try:
        return await get_current_user(request, session)
    except AuthenticationError:
        return None


def require_customer(message: str):
    """Dependency factory admitting only customers; others get ``message`` with a 403."""

    async def dependency(current: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        current.ensure_role(UserRole.CUSTOMER, message)
        return current

    return dependency


def require_truck_owner(message: str):
    """Dependency factory admitting only truck owners who have a truck."""

    async def dependency(current: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        current.ensure_role(UserRole.TRUCK_OWNER, message)
        current.owned_truck()
        return current

    return dependency
