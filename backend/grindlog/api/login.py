import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from grindlog.api.auth import get_settings
from grindlog.config import Settings
from grindlog.crud import user as crud_user
from grindlog.database import get_db
from grindlog.errors import ConflictError, UnauthorizedError
from grindlog.models.user import User
from grindlog.schemas.user import AuthResponse, UserCreate, UserLogin
from grindlog.utils.utils import create_access_token, verify_password

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


def issue_token(user: User, settings: Settings) -> str:
    return create_access_token(
        data={"sub": str(user.id), "email": user.email, "role": user.role},
        secret_key=settings.secret_key,
        algorithm=settings.algorithm,
        expires_minutes=settings.access_token_expire_minutes,
    )


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    user: UserCreate,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """
    Create an account and return it together with an access token.
    """
    if crud_user.get_user_by_email_or_username(db, email=user.email, username=user.username):
        raise ConflictError("User already exists")

    try:
        new_user = crud_user.create_user(db=db, user=user)
    except IntegrityError:
        # Lost a race with a concurrent registration of the same email/username
        db.rollback()
        raise ConflictError("User already exists")

    logger.info("Registered user %s", new_user.id)
    return {"user": new_user, "token": issue_token(new_user, settings)}


@router.post("/login", response_model=AuthResponse)
def login(
    login_data: UserLogin,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """
    JSON login: exchange email + password for an access token.
    """
    user = crud_user.get_user_by_email(db, email=login_data.email)
    if not user or not verify_password(login_data.password, user.password_hash):
        raise UnauthorizedError("Invalid credentials")

    return {"user": user, "token": issue_token(user, settings)}
