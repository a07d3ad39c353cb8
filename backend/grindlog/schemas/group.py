from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from grindlog.schemas.common import CamelModel


class GroupCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    is_private: bool = False


class GroupResponse(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    is_private: bool
    created_by: Optional[int] = None
    created_at: datetime
    member_count: int = 0

    class Config:
        from_attributes = True


class MyGroup(GroupResponse):
    member_role: str


class GroupDetail(GroupResponse):
    is_member: bool
    member_role: Optional[str] = None


class GroupMemberRow(BaseModel):
    id: int
    username: str
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None
    role: str
    joined_at: datetime


class SharingUpdate(CamelModel):
    share_workouts: Optional[bool] = None
    share_diet: Optional[bool] = None
    share_progress: Optional[bool] = None
    share_plans: Optional[bool] = None


class SharingResponse(BaseModel):
    id: int
    user_id: int
    group_id: int
    share_workouts: bool
    share_diet: bool
    share_progress: bool
    share_plans: bool

    class Config:
        from_attributes = True


class FeedItem(BaseModel):
    type: str = "workout"
    id: int
    name: Optional[str] = None
    timestamp: datetime
    username: str
    display_name: Optional[str] = None
    avatar_url: Optional[str] = None


class AdminGroupRow(GroupResponse):
    created_by_username: Optional[str] = None
