"""Payment allocation model"""
import uuid
from datetime import datetime
from sqlalchemy import Column, DateTime, ForeignKey, Integer, Numeric, Text, CheckConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from loan_ledger.database import Base


class PaymentAllocation(Base):
    """One person's share of a group entry"""

    __tablename__ = "payment_allocation"

    allocation_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    entry_id = Column(UUID(as_uuid=True), ForeignKey("entry.entry_id", ondelete="CASCADE"), nullable=False, index=True)
    person_id = Column(UUID(as_uuid=True), ForeignKey("person.person_id"), nullable=False, index=True)
    description = Column(Text, nullable=False)
    amount = Column(Numeric(15, 2), nullable=False)
    notes = Column(Text, nullable=True)
    position = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Constraints
    __table_args__ = (
        CheckConstraint('amount >= 0', name='check_allocation_amount_non_negative'),
    )

    # Relationships
    entry = relationship("Entry", back_populates="allocations")
    person = relationship("Person", back_populates="allocations")

    def __repr__(self) -> str:
        return f"<PaymentAllocation(entry_id={self.entry_id}, person_id={self.person_id}, amount={self.amount})>"
