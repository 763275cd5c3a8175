"""Allocation engine records"""

import enum
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from loan_ledger.core.exceptions import AllocationValidationError
from loan_ledger.utils.decimal_utils import CENT


class SplitMode(str, enum.Enum):
    """How an expense total is divided among participants"""
    EQUAL = "equal"
    PERCENT = "percent"
    AMOUNT = "amount"


class Participant(BaseModel):
    """A person who may receive a share of an expense"""

    id: UUID
    display_name: str

    model_config = ConfigDict(frozen=True)


class AllocationLineItem(BaseModel):
    """One participant's share while the allocation is being edited"""

    participant_id: Optional[UUID] = None
    participant_name: str = ""
    description: str = ""
    amount: Decimal = Decimal("0")
    percent: Optional[Decimal] = None
    notes: Optional[str] = None

    @field_validator("amount", "percent", mode="before")
    @classmethod
    def convert_to_decimal(cls, v):
        """Convert numeric values to Decimal"""
        if v is None:
            return v
        return Decimal(str(v))


class AllocationItemUpdate(BaseModel):
    """
    Partial update for a line item.

    Only fields that were explicitly set are applied, so
    `AllocationItemUpdate(notes=None)` clears the notes while
    `AllocationItemUpdate()` changes nothing.
    """

    participant_id: Optional[UUID] = None
    participant_name: Optional[str] = None
    description: Optional[str] = None
    amount: Optional[Decimal] = Field(default=None, ge=0)
    percent: Optional[Decimal] = Field(default=None, ge=0)
    notes: Optional[str] = None

    @field_validator("amount", "percent", mode="before")
    @classmethod
    def convert_to_decimal(cls, v):
        """Convert numeric values to Decimal"""
        if v is None:
            return v
        return Decimal(str(v))


class FinalizedAllocation(BaseModel):
    """Validated share, ready for the allocation store"""

    participant_id: Optional[UUID]
    participant_name: str
    description: str
    amount: Decimal
    percent: Optional[Decimal] = None
    notes: Optional[str] = None


class EngineState(BaseModel):
    """Everything the engine knows about one allocation editing session"""

    total_amount: Decimal
    mode: SplitMode
    participants: List[Participant] = []
    items: List[AllocationLineItem] = []
    expense_name: Optional[str] = None
    tolerance: Decimal = CENT

    @field_validator("total_amount", "tolerance", mode="before")
    @classmethod
    def convert_to_decimal(cls, v):
        """Convert numeric values to Decimal"""
        return Decimal(str(v))


class SubmitResult(BaseModel):
    """Outcome of AllocationEngine.submit; either allocations or an error"""

    ok: bool
    allocations: List[FinalizedAllocation] = []
    draft: List[AllocationLineItem] = []
    error: Optional[AllocationValidationError] = None

    model_config = ConfigDict(arbitrary_types_allowed=True)
