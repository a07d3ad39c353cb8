from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from grindlog.models.user import User
from grindlog.models.workout import WorkoutSession
from grindlog.schemas.user import UserCreate, UserUpdate
from grindlog.utils.utils import hash_password


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def get_user_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username).first()


def get_user_by_email_or_username(db: Session, email: str, username: str) -> Optional[User]:
    return db.query(User).filter(or_(User.email == email, User.username == username)).first()


def search_users(db: Session, search: Optional[str] = None, skip: int = 0, limit: int = 50):
    """Users newest first, each paired with their workout session count."""
    workout_count = (
        db.query(func.count(WorkoutSession.id))
        .filter(WorkoutSession.user_id == User.id)
        .correlate(User)
        .scalar_subquery()
    )
    query = db.query(User, workout_count.label("workout_count"))
    if search:
        pattern = f"%{search}%"
        query = query.filter(
            or_(User.username.ilike(pattern), User.email.ilike(pattern), User.display_name.ilike(pattern))
        )
    return query.order_by(User.created_at.desc(), User.id.desc()).offset(skip).limit(limit).all()


def count_users(db: Session) -> int:
    return db.query(func.count(User.id)).scalar() or 0


def create_user(db: Session, user: UserCreate) -> User:
    db_user = User(
        email=user.email,
        username=user.username,
        password_hash=hash_password(user.password),
        display_name=user.display_name or user.username,
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


def update_user(db: Session, user_id: int, user_update: UserUpdate) -> Optional[User]:
    db_user = get_user(db, user_id)
    if not db_user:
        return None

    update_data = user_update.model_dump(exclude_unset=True, exclude_none=True)
    for field, value in update_data.items():
        setattr(db_user, field, value)

    db.commit()
    db.refresh(db_user)
    return db_user


def set_role(db: Session, user_id: int, role: str) -> Optional[User]:
    db_user = get_user(db, user_id)
    if not db_user:
        return None
    db_user.role = role
    db.commit()
    db.refresh(db_user)
    return db_user
