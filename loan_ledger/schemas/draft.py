"""Allocation draft request and response schemas"""

from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from loan_ledger.schemas.allocation import (AllocationItemUpdate,
                                            AllocationLineItem, EngineState,
                                            FinalizedAllocation, SplitMode)


class ExpenseContext(BaseModel):
    """The expense an allocation session belongs to"""

    entry_id: UUID
    entry_name: Optional[str] = None
    total_amount: Decimal = Field(..., gt=0)
    group_id: Optional[UUID] = None

    @field_validator("total_amount", mode="before")
    @classmethod
    def convert_total_amount(cls, v):
        """Convert total_amount to Decimal"""
        return Decimal(str(v))


class DraftOpenRequest(BaseModel):
    """Open a draft for an entry"""

    mode: SplitMode


class DraftStateRequest(BaseModel):
    """Command that only needs the current state"""

    state: EngineState


class DraftIndexRequest(DraftStateRequest):
    """Command on one line item"""

    index: int = Field(..., ge=0)


class DraftUpdateRequest(DraftIndexRequest):
    """Change fields of one line item"""

    changes: AllocationItemUpdate


class DraftModeRequest(DraftStateRequest):
    """Restart the draft in another mode"""

    mode: SplitMode


class DraftResponse(BaseModel):
    """State after a command, with its derived totals"""

    state: EngineState
    total: Decimal
    is_valid: bool


class SavedAllocationsResponse(BaseModel):
    """Allocations currently saved for an entry"""

    entry_id: UUID
    total_amount: Decimal
    items: List[AllocationLineItem]


class SubmitResponse(BaseModel):
    """Allocations written by a successful submit"""

    entry_id: UUID
    allocations: List[FinalizedAllocation]
