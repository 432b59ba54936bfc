"""User repository: get, create, delete."""
from typing import Optional

from sqlalchemy.orm import Session

from models.user import User


def get_user(session: Session, email: str) -> Optional[User]:
    """Return a user by email or None."""
    return session.get(User, email)


def create_user(
    session: Session,
    *,
    email: str,
    first_name: str,
    last_name: str,
    phone_numbers: list[str] | None = None,
) -> User:
    """Create a user, commit, and return it."""
    user = User(
        email=email,
        first_name=first_name,
        last_name=last_name,
        phone_numbers=list(phone_numbers or []),
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


def delete_user(session: Session, email: str) -> bool:
    """Delete a user by email. Returns True if deleted, False if not found."""
    user = get_user(session, email)
    if user is None:
        return False
    session.delete(user)
    session.commit()
    return True
