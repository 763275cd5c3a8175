"""Entry model"""
import uuid
from datetime import datetime
from sqlalchemy import Column, DateTime, ForeignKey, Numeric, String, CheckConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from loan_ledger.database import Base


class Entry(Base):
    """Money lent to a person or a group"""

    __tablename__ = "entry"

    entry_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4, index=True)
    entry_name = Column(String(255), nullable=True)
    amount_borrowed = Column(Numeric(15, 2), nullable=False)
    borrower_group_id = Column(UUID(as_uuid=True), ForeignKey("borrower_group.group_id"), nullable=True, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    # Constraints
    __table_args__ = (
        CheckConstraint('amount_borrowed > 0', name='check_amount_borrowed_positive'),
    )

    # Relationships
    borrower_group = relationship("Group", back_populates="entries")
    allocations = relationship("PaymentAllocation", back_populates="entry", cascade="all, delete-orphan")

    def __repr__(self) -> str:
        return f"<Entry(entry_id={self.entry_id}, entry_name={self.entry_name}, amount_borrowed={self.amount_borrowed})>"
