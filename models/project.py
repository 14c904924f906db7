"""
Project model grouping tasks under one owner and a set of members.
"""

from sqlalchemy import Column, ForeignKey, Index, String, Table, Text
from sqlalchemy.orm import relationship

from .base import UUID, Base, BaseModel

project_members = Table(
    "project_members",
    Base.metadata,
    Column("project_id", UUID(), ForeignKey("projects.id"), primary_key=True),
    Column("user_id", UUID(), ForeignKey("users.id"), primary_key=True),
    Index("ix_project_members_user_id", "user_id"),
)


class Project(BaseModel):
    """
    Represents a project entity in the application.

    The owner is fixed at creation and is never part of ``members``. Tasks
    reference the project by ``project_id`` only; removing them when the
    project goes away is the job of the project service.
    """

    __tablename__ = "projects"

    owner_id = Column(UUID(), ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=False, default="")

    # Relationships
    owner = relationship("User", foreign_keys=[owner_id], lazy="selectin")
    members = relationship(
        "User",
        secondary=project_members,
        lazy="selectin",
        order_by="User.name",
    )

    def is_owner(self, user_id) -> bool:
        return self.owner_id == user_id

    def is_member(self, user_id) -> bool:
        return any(member.id == user_id for member in self.members)
