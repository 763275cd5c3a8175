"""Payment allocation data access"""
from typing import List
from uuid import UUID
from sqlalchemy import select, delete as sql_delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from loan_ledger.models.payment_allocation import PaymentAllocation


class AllocationRepository:
    """Repository for PaymentAllocation database operations"""

    @staticmethod
    async def get_by_entry(db: AsyncSession, entry_id: UUID) -> List[PaymentAllocation]:
        """
        Get all allocations for an entry, with the person loaded.

        Args:
            db: Database session
            entry_id: Entry UUID

        Returns:
            List of allocations in saved order
        """
        result = await db.execute(
            select(PaymentAllocation)
            .where(PaymentAllocation.entry_id == entry_id)
            .options(selectinload(PaymentAllocation.person))
            .order_by(PaymentAllocation.position)
        )
        return list(result.scalars().all())

    @staticmethod
    async def create_batch(db: AsyncSession, allocations: List[PaymentAllocation]) -> List[PaymentAllocation]:
        """
        Create multiple allocations in a batch.

        Args:
            db: Database session
            allocations: List of PaymentAllocation objects

        Returns:
            List of created allocations
        """
        db.add_all(allocations)
        await db.flush()

        for allocation in allocations:
            await db.refresh(allocation)

        return allocations

    @staticmethod
    async def delete_by_entry(db: AsyncSession, entry_id: UUID) -> int:
        """
        Delete all allocations for an entry.

        Args:
            db: Database session
            entry_id: Entry UUID

        Returns:
            Number of allocations deleted
        """
        result = await db.execute(
            sql_delete(PaymentAllocation).where(PaymentAllocation.entry_id == entry_id)
        )
        await db.flush()
        return result.rowcount
