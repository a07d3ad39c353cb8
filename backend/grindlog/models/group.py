from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint

from grindlog.database import Base
from grindlog.utils.time import utcnow


class Group(Base):
    __tablename__ = "groups"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, index=True)
    description = Column(Text)
    is_private = Column(Boolean, nullable=False, default=False)
    created_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)


class GroupMember(Base):
    __tablename__ = "group_members"
    __table_args__ = (UniqueConstraint("group_id", "user_id", name="uq_group_members_group_user"),)

    id = Column(Integer, primary_key=True, index=True)
    group_id = Column(Integer, ForeignKey("groups.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    role = Column(String(20), nullable=False, default="member")  # owner / admin / member
    joined_at = Column(DateTime, default=utcnow, nullable=False)


class SharingSetting(Base):
    """What one member shares with one group."""

    __tablename__ = "sharing_settings"
    __table_args__ = (UniqueConstraint("user_id", "group_id", name="uq_sharing_settings_user_group"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    group_id = Column(Integer, ForeignKey("groups.id", ondelete="CASCADE"), nullable=False, index=True)
    share_workouts = Column(Boolean, nullable=False, default=True)
    share_diet = Column(Boolean, nullable=False, default=False)
    share_progress = Column(Boolean, nullable=False, default=False)
    share_plans = Column(Boolean, nullable=False, default=True)
