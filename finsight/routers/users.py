# finsight/routers/users.py
"""
User endpoints.

Users own portfolios and alerts. There is no authentication; callers pass
user IDs explicitly.
"""

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy import select
from sqlalchemy.orm import Session

from finsight.database import get_db
from finsight.models import User
from finsight.schemas.users import UserCreate, UserResponse
from finsight.services.exceptions import UserNotFoundError

router = APIRouter(
    prefix="/users",
    tags=["Users"],
)


def get_user_or_404(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise UserNotFoundError(user_id)
    return user


@router.post(
    "/",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a user",
)
def create_user(
        user: UserCreate,
        db: Session = Depends(get_db)
) -> User:
    """
    Create a user.

    Raises **409** if the email is already registered.
    """
    existing = db.scalars(select(User).where(User.email == user.email)).first()
    if existing is not None:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"User with email {user.email} already exists"
        )

    db_user = User(**user.model_dump())
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Get a user by ID",
)
def get_user(
        user_id: int,
        db: Session = Depends(get_db)
) -> User:
    return get_user_or_404(db, user_id)
