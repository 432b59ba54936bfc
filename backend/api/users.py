"""User API routes."""
import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from db import get_db
from repositories.ride_repository import list_rides_for_user
from repositories.user_repository import (
    create_user as repo_create_user,
    delete_user as repo_delete_user,
    get_user as repo_get_user,
)
from ride_core.errors import Conflict, NotFound
from schemas.users import UserCreate, UserResponse

LOG = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


def _user_to_response(u) -> UserResponse:
    return UserResponse(
        email=u.email,
        first_name=u.first_name,
        last_name=u.last_name,
        phone_numbers=list(u.phone_numbers or []),
    )


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register_user(body: UserCreate, db: Session = Depends(get_db)) -> UserResponse:
    """Register a new user; email must be unused."""
    if repo_get_user(db, body.email) is not None:
        raise Conflict("User already exists")
    try:
        user = repo_create_user(
            db,
            email=body.email,
            first_name=body.first_name,
            last_name=body.last_name,
            phone_numbers=body.phone_numbers,
        )
    except IntegrityError as e:
        # Registered concurrently between the check and the insert.
        db.rollback()
        LOG.warning("Duplicate registration rejected: %s", e.orig)
        raise Conflict("User already exists") from e
    return _user_to_response(user)


@router.get("/{email}", response_model=UserResponse)
def get_user(email: str, db: Session = Depends(get_db)) -> UserResponse:
    """Get a user profile."""
    user = repo_get_user(db, email)
    if user is None:
        raise NotFound("User not found")
    return _user_to_response(user)


@router.delete("/{email}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(email: str, db: Session = Depends(get_db)) -> None:
    """Delete a user and their ride history. Not allowed while a ride is active."""
    if repo_get_user(db, email) is None:
        raise NotFound("User not found")
    if any(r.end_ts is None for r in list_rides_for_user(db, email)):
        raise Conflict("User has an active ride")
    repo_delete_user(db, email)
    return None
