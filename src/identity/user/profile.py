"""Read access to user accounts."""

from sqlalchemy.orm import Session

from identity.user.user import User
from shared.exceptions import ObjectNotFoundError


def get_user(session: Session, user_id: int) -> User:
    user = session.get(User, user_id)
    if user is None:
        raise ObjectNotFoundError("User not found")
    return user
