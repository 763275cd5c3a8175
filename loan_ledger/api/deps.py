"""Dependency injection (db, services)"""

from uuid import UUID

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from loan_ledger.core.exceptions import NotFoundError, ValidationError
from loan_ledger.database import get_db
from loan_ledger.repositories.entry_repository import EntryRepository
from loan_ledger.schemas.draft import ExpenseContext
from loan_ledger.services.allocation_service import AllocationService
from loan_ledger.services.allocation_store import (SqlAllocationStore,
                                                   SqlParticipantSource)


async def get_allocation_service(
    db: AsyncSession = Depends(get_db),
) -> AllocationService:
    """
    Build an allocation service over the request's database session.

    Args:
        db: Database session

    Returns:
        AllocationService using SQL-backed store and participant source
    """
    return AllocationService(SqlAllocationStore(db), SqlParticipantSource(db))


async def get_expense_context(
    entry_id: UUID, db: AsyncSession = Depends(get_db)
) -> ExpenseContext:
    """
    Load the entry named in the path.

    Raises:
        NotFoundError: If the entry does not exist
        ValidationError: If the entry has no positive amount to allocate
    """
    entry = await EntryRepository.get_by_id(db, entry_id)
    if entry is None:
        raise NotFoundError("Entry not found")
    if entry.amount_borrowed is None or entry.amount_borrowed <= 0:
        raise ValidationError("Entry amount must be greater than 0 to allocate")

    return ExpenseContext(
        entry_id=entry.entry_id,
        entry_name=entry.entry_name,
        total_amount=entry.amount_borrowed,
        group_id=entry.borrower_group_id,
    )
