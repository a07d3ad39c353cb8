from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from grindlog.api.auth import AuthContext, get_current_user
from grindlog.crud import user as crud_user
from grindlog.database import get_db
from grindlog.errors import NotFoundError
from grindlog.schemas.user import PublicProfile, UserResponse, UserUpdate

router = APIRouter(prefix="/api/users", tags=["users"])


# GET - Get current user
@router.get("/me", response_model=UserResponse)
def read_me(
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    user = crud_user.get_user(db, current_user.id)
    if user is None:
        raise NotFoundError("User not found")
    return user


# PATCH - Update display name / avatar
@router.patch("/me", response_model=UserResponse)
def update_me(
    user_update: UserUpdate,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    user = crud_user.update_user(db, user_id=current_user.id, user_update=user_update)
    if user is None:
        raise NotFoundError("User not found")
    return user


# GET - Public profile, no token needed
@router.get("/{username}", response_model=PublicProfile)
def read_public_profile(username: str, db: Session = Depends(get_db)):
    user = crud_user.get_user_by_username(db, username)
    if user is None:
        raise NotFoundError("User not found")
    return user
