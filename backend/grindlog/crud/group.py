"""
Group CRUD
----------
Database access for groups, memberships and per-group sharing settings.
"""
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from grindlog.models.group import Group, GroupMember, SharingSetting
from grindlog.models.user import User
from grindlog.models.workout import WorkoutSession


def _member_count(db: Session):
    return (
        db.query(func.count(GroupMember.id))
        .filter(GroupMember.group_id == Group.id)
        .correlate(Group)
        .scalar_subquery()
    )


def get_group(db: Session, group_id: int) -> Optional[Group]:
    return db.query(Group).filter(Group.id == group_id).first()


def get_group_with_count(db: Session, group_id: int):
    """(Group, member_count) or None."""
    return db.query(Group, _member_count(db)).filter(Group.id == group_id).first()


def get_membership(db: Session, group_id: int, user_id: int) -> Optional[GroupMember]:
    return (
        db.query(GroupMember)
        .filter(GroupMember.group_id == group_id, GroupMember.user_id == user_id)
        .first()
    )


def list_user_groups(db: Session, user_id: int):
    """(Group, member_role, member_count) for every group the user belongs to."""
    return (
        db.query(Group, GroupMember.role, _member_count(db))
        .join(GroupMember, GroupMember.group_id == Group.id)
        .filter(GroupMember.user_id == user_id)
        .order_by(Group.name)
        .all()
    )


def search_public_groups(db: Session, term: str, limit: int):
    member_count = _member_count(db).label("member_count")
    return (
        db.query(Group, member_count)
        .filter(Group.is_private.is_(False), Group.name.ilike(f"%{term}%"))
        .order_by(member_count.desc(), Group.name)
        .limit(limit)
        .all()
    )


def list_members(db: Session, group_id: int):
    return (
        db.query(User, GroupMember)
        .join(GroupMember, GroupMember.user_id == User.id)
        .filter(GroupMember.group_id == group_id)
        .order_by(GroupMember.role, User.username)
        .all()
    )


def create_group(db: Session, name: str, description: Optional[str], is_private: bool, owner_id: int) -> Group:
    """
    Adds the group, the owner's membership and default sharing settings.
    Caller commits.
    """
    group = Group(name=name, description=description, is_private=is_private, created_by=owner_id)
    db.add(group)
    db.flush()
    db.add(GroupMember(group_id=group.id, user_id=owner_id, role="owner"))
    db.add(SharingSetting(user_id=owner_id, group_id=group.id))
    return group


def add_member(db: Session, group_id: int, user_id: int) -> None:
    """Idempotent: existing membership and sharing rows are left alone. Caller commits."""
    if get_membership(db, group_id, user_id) is None:
        db.add(GroupMember(group_id=group_id, user_id=user_id))
    if get_sharing(db, group_id, user_id) is None:
        db.add(SharingSetting(user_id=user_id, group_id=group_id))


def remove_member(db: Session, group_id: int, user_id: int) -> None:
    db.query(GroupMember).filter(GroupMember.group_id == group_id, GroupMember.user_id == user_id).delete(
        synchronize_session=False
    )
    db.query(SharingSetting).filter(SharingSetting.group_id == group_id, SharingSetting.user_id == user_id).delete(
        synchronize_session=False
    )


def get_sharing(db: Session, group_id: int, user_id: int) -> Optional[SharingSetting]:
    return (
        db.query(SharingSetting)
        .filter(SharingSetting.group_id == group_id, SharingSetting.user_id == user_id)
        .first()
    )


def shared_workouts(db: Session, group_id: int, limit: int):
    """Finished sessions of members who share workouts with the group, newest first."""
    return (
        db.query(WorkoutSession, User)
        .join(User, WorkoutSession.user_id == User.id)
        .join(
            SharingSetting,
            (SharingSetting.user_id == WorkoutSession.user_id) & (SharingSetting.group_id == group_id),
        )
        .filter(SharingSetting.share_workouts.is_(True), WorkoutSession.ended_at.isnot(None))
        .order_by(WorkoutSession.started_at.desc(), WorkoutSession.id.desc())
        .limit(limit)
        .all()
    )


def list_all_groups(db: Session, skip: int = 0, limit: int = 50):
    """(Group, member_count, creator username) for every group, newest first."""
    return (
        db.query(Group, _member_count(db), User.username)
        .outerjoin(User, Group.created_by == User.id)
        .order_by(Group.created_at.desc(), Group.id.desc())
        .offset(skip)
        .limit(limit)
        .all()
    )
