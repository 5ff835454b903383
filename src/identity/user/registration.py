"""Register a new customer or truck owner."""

from datetime import date

from pydantic import BaseModel, ConfigDict
from sqlalchemy import select
from sqlalchemy.orm import Session

from identity.user.user import User
from shared.exceptions import ValidationError
from shared.utils.logging import get_logger
from vendors.truck.truck import Truck

logger = get_logger(__name__)


class RegisterUser(BaseModel):
    """Create a customer or truck-owner account.

    Registering a truck owner also opens the owner's truck.
    """

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    email: str | None = None
    password: str | None = None
    role: str | None = None
    birth_date: date | None = None


def register_user(session: Session, command: RegisterUser) -> User:
    user = User.register(
        name=command.name,
        email=command.email,
        password=command.password,
        role=command.role,
        birth_date=command.birth_date,
    )

    existing = session.scalar(select(User.user_id).where(User.email == user.email))
    if existing is not None:
        raise ValidationError({"email": ["User with this email already exists"]})

    session.add(user)
    session.flush()

    if user.is_truck_owner:
        truck = Truck.create_for_owner(owner_id=user.user_id, owner_name=user.name)
        session.add(truck)
        session.flush()
        logger.info("truck_created", truck_id=truck.truck_id, owner_id=user.user_id)

    logger.info("user_registered", user_id=user.user_id, role=user.role)
    return user
