"""Person model"""

import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from loan_ledger.database import Base


class Person(Base):
    """Someone who lends, borrows or owes a share of an expense"""

    __tablename__ = "person"

    person_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    full_name = Column(String(255), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    # Relationships
    memberships = relationship("GroupMember", back_populates="person")
    allocations = relationship("PaymentAllocation", back_populates="person")

    def __repr__(self) -> str:
        return f"<Person(person_id={self.person_id}, full_name={self.full_name})>"
