import logging
from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from grindlog.api.auth import AuthContext, get_current_user
from grindlog.config import QUERY_DEFAULTS
from grindlog.crud import group as crud_group
from grindlog.database import get_db, to_dict, transaction
from grindlog.errors import ForbiddenError, NotFoundError
from grindlog.models.group import Group
from grindlog.schemas.common import MessageResponse
from grindlog.schemas.group import (
    FeedItem,
    GroupCreate,
    GroupDetail,
    GroupMemberRow,
    GroupResponse,
    MyGroup,
    SharingResponse,
    SharingUpdate,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/groups", tags=["groups"])


def visible_group(db: Session, group_id: int, user_id: int) -> Group:
    """The group, provided it is public or the caller is a member."""
    group = crud_group.get_group(db, group_id)
    if group is None:
        raise NotFoundError("Group not found")
    if group.is_private and crud_group.get_membership(db, group_id, user_id) is None:
        raise ForbiddenError("Access denied")
    return group


@router.get("", response_model=List[MyGroup])
def my_groups(
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    rows = crud_group.list_user_groups(db, current_user.id)
    return [to_dict(group, member_role=role, member_count=count or 0) for group, role, count in rows]


@router.post("", response_model=GroupResponse, status_code=status.HTTP_201_CREATED)
def create_group(
    request: GroupCreate,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    with transaction(db):
        group = crud_group.create_group(
            db,
            name=request.name,
            description=request.description,
            is_private=request.is_private,
            owner_id=current_user.id,
        )
    db.refresh(group)
    logger.info("User %s created group %s", current_user.id, group.id)
    return to_dict(group, member_count=1)


@router.get("/search/public", response_model=List[GroupResponse])
def search_public_groups(
    q: str = "",
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    rows = crud_group.search_public_groups(db, q, QUERY_DEFAULTS.group_search_limit)
    return [to_dict(group, member_count=count or 0) for group, count in rows]


@router.get("/{group_id}", response_model=GroupDetail)
def group_details(
    group_id: int,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    row = crud_group.get_group_with_count(db, group_id)
    if row is None:
        raise NotFoundError("Group not found")
    group, count = row

    membership = crud_group.get_membership(db, group_id, current_user.id)
    if group.is_private and membership is None:
        raise ForbiddenError("Access denied")

    return to_dict(
        group,
        member_count=count or 0,
        is_member=membership is not None,
        member_role=membership.role if membership else None,
    )


@router.get("/{group_id}/members", response_model=List[GroupMemberRow])
def group_members(
    group_id: int,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    visible_group(db, group_id, current_user.id)
    return [
        {
            "id": user.id,
            "username": user.username,
            "display_name": user.display_name,
            "avatar_url": user.avatar_url,
            "role": member.role,
            "joined_at": member.joined_at,
        }
        for user, member in crud_group.list_members(db, group_id)
    ]


@router.post("/{group_id}/join", response_model=MessageResponse)
def join_group(
    group_id: int,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    group = crud_group.get_group(db, group_id)
    if group is None:
        raise NotFoundError("Group not found")
    if group.is_private:
        raise ForbiddenError("This group is private")

    with transaction(db):
        crud_group.add_member(db, group_id, current_user.id)
    return {"message": "Joined group successfully"}


@router.post("/{group_id}/leave", response_model=MessageResponse)
def leave_group(
    group_id: int,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    with transaction(db):
        crud_group.remove_member(db, group_id, current_user.id)
    return {"message": "Left group successfully"}


@router.patch("/{group_id}/sharing", response_model=SharingResponse)
def update_sharing(
    group_id: int,
    request: SharingUpdate,
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    sharing = crud_group.get_sharing(db, group_id, current_user.id)
    if sharing is None:
        raise NotFoundError("Sharing settings not found")

    for field, value in request.model_dump(exclude_none=True).items():
        setattr(sharing, field, value)
    db.commit()
    db.refresh(sharing)
    return sharing


@router.get("/{group_id}/feed", response_model=List[FeedItem])
def group_feed(
    group_id: int,
    limit: int = Query(QUERY_DEFAULTS.feed_limit, ge=1, le=QUERY_DEFAULTS.max_page_limit),
    db: Session = Depends(get_db),
    current_user: AuthContext = Depends(get_current_user),
):
    visible_group(db, group_id, current_user.id)
    return [
        {
            "type": "workout",
            "id": session.id,
            "name": session.name,
            "timestamp": session.started_at,
            "username": user.username,
            "display_name": user.display_name,
            "avatar_url": user.avatar_url,
        }
        for session, user in crud_group.shared_workouts(db, group_id, limit)
    ]
