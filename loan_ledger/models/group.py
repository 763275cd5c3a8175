"""Group and group membership models"""
import uuid
from datetime import datetime
from sqlalchemy import Column, DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from loan_ledger.database import Base


class Group(Base):
    """A named set of people who borrow together"""

    __tablename__ = "borrower_group"

    group_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    group_name = Column(String(255), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    # Relationships
    members = relationship("GroupMember", back_populates="group", cascade="all, delete-orphan")
    entries = relationship("Entry", back_populates="borrower_group")

    def __repr__(self) -> str:
        return f"<Group(group_id={self.group_id}, group_name={self.group_name})>"


class GroupMember(Base):
    """Membership of a person in a group"""

    __tablename__ = "group_member"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    group_id = Column(UUID(as_uuid=True), ForeignKey("borrower_group.group_id", ondelete="CASCADE"), nullable=False, index=True)
    person_id = Column(UUID(as_uuid=True), ForeignKey("person.person_id"), nullable=False, index=True)
    joined_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    __table_args__ = (
        UniqueConstraint('group_id', 'person_id', name='uq_group_person'),
    )

    # Relationships
    group = relationship("Group", back_populates="members")
    person = relationship("Person", back_populates="memberships")

    def __repr__(self) -> str:
        return f"<GroupMember(group_id={self.group_id}, person_id={self.person_id})>"
