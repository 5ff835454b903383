"""Log in, log out, and resolve the acting user from a session token."""

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict
from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from identity.session.session import UserSession
from identity.user.user import User, UserRole
from shared import clock
from shared.config import get_settings
from shared.exceptions import AuthenticationError, PermissionDeniedError, ValidationError
from shared.utils.logging import get_logger
from vendors.truck.truck import Truck

logger = get_logger(__name__)


@dataclass(frozen=True)
class CurrentUser:
    """The user behind a request, with their truck when they own one."""

    user: User
    session: UserSession
    truck: Truck | None = None

    @property
    def user_id(self) -> int:
        return self.user.user_id

    @property
    def role(self) -> str:
        return self.user.role

    @property
    def truck_id(self) -> int | None:
        return self.truck.truck_id if self.truck else None

    def ensure_role(self, role: UserRole, message: str) -> None:
        if self.role != role.value:
            raise PermissionDeniedError(message)

    def owned_truck(self) -> Truck:
        if self.truck is None:
            raise PermissionDeniedError("No truck is associated with this account")
        return self.truck


@dataclass(frozen=True)
class LoginResult:
    user: User
    session: UserSession
    truck: Truck | None = None


class LogIn(BaseModel):
    model_config = ConfigDict(frozen=True)

    email: str | None = None
    password: str | None = None


def _truck_of(session: Session, user: User) -> Truck | None:
    if not user.is_truck_owner:
        return None
    return session.scalar(select(Truck).where(Truck.owner_id == user.user_id))


def log_in(session: Session, command: LogIn) -> LoginResult:
    """Check credentials and replace any existing session with a fresh one."""
    if not command.email:
        raise ValidationError({"email": ["Email is required"]})
    if not command.password:
        raise ValidationError({"password": ["Password is required"]})

    user = session.scalar(select(User).where(User.email == command.email.strip().lower()))
    if user is None or not user.verify_password(command.password):
        raise ValidationError({"credentials": ["Invalid email or password"]})

    session.execute(delete(UserSession).where(UserSession.user_id == user.user_id))

    user_session = UserSession.open(
        user_id=user.user_id,
        now=clock.now(),
        ttl_minutes=get_settings().session_ttl_minutes,
    )
    session.add(user_session)
    session.flush()

    logger.info("user_logged_in", user_id=user.user_id, role=user.role)
    return LoginResult(user=user, session=user_session, truck=_truck_of(session, user))


def log_out(session: Session, token: str | None) -> None:
    if not token:
        return
    session.execute(delete(UserSession).where(UserSession.token == token))


def resolve_session(session: Session, token: str | None) -> CurrentUser:
    if not token:
        raise AuthenticationError("No session token found")

    row = session.execute(
        select(UserSession, User).join(User, User.user_id == UserSession.user_id).where(UserSession.token == token)
    ).first()
    if row is None:
        raise AuthenticationError("Invalid session token")

    user_session, user = row
    if user_session.is_expired(clock.now()):
        raise AuthenticationError("Session expired")

    truck = _truck_of(session, user)
    if user.is_truck_owner and truck is None:
        logger.warning("truck_owner_without_truck", user_id=user.user_id)

    return CurrentUser(user=user, session=user_session, truck=truck)
