"""Boundaries between the allocation engine and storage"""

import logging
from abc import ABC, abstractmethod
from typing import List
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from loan_ledger.core.exceptions import PersistenceError
from loan_ledger.models.payment_allocation import PaymentAllocation
from loan_ledger.repositories.allocation_repository import AllocationRepository
from loan_ledger.repositories.participant_repository import ParticipantRepository
from loan_ledger.schemas.allocation import (AllocationLineItem,
                                            FinalizedAllocation, Participant)
from loan_ledger.schemas.draft import ExpenseContext

logger = logging.getLogger(__name__)


class ParticipantSource(ABC):
    """Supplies the people who may receive a share of an expense"""

    @abstractmethod
    async def list_eligible(self, context: ExpenseContext) -> List[Participant]:
        """Return eligible participants in display order"""
        pass


class AllocationStore(ABC):
    """Loads and saves the allocations of an expense"""

    @abstractmethod
    async def load_existing(self, entry_id: UUID) -> List[AllocationLineItem]:
        """Return saved allocations as line items (empty if none)"""
        pass

    @abstractmethod
    async def replace_all(
        self, entry_id: UUID, allocations: List[FinalizedAllocation]
    ) -> None:
        """
        Replace every saved allocation of an entry, all or nothing.

        Raises:
            PersistenceError: If the allocations could not be saved
        """
        pass


class SqlParticipantSource(ParticipantSource):
    """Eligible participants are the members of the entry's borrower group"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_eligible(self, context: ExpenseContext) -> List[Participant]:
        if context.group_id is None:
            return []

        members = await ParticipantRepository.list_group_members(self.db, context.group_id)
        return [
            Participant(id=person.person_id, display_name=person.full_name)
            for person in members
        ]


class SqlAllocationStore(AllocationStore):
    """AllocationStore backed by the payment_allocation table"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def load_existing(self, entry_id: UUID) -> List[AllocationLineItem]:
        try:
            saved = await AllocationRepository.get_by_entry(self.db, entry_id)
        except SQLAlchemyError as exc:
            raise PersistenceError("Could not load allocations", details=str(exc)) from exc

        return [
            AllocationLineItem(
                participant_id=allocation.person_id,
                participant_name=allocation.person.full_name if allocation.person else "",
                description=allocation.description,
                amount=allocation.amount,
                notes=allocation.notes or "",
            )
            for allocation in saved
        ]

    async def replace_all(
        self, entry_id: UUID, allocations: List[FinalizedAllocation]
    ) -> None:
        try:
            async with self.db.begin_nested():
                deleted = await AllocationRepository.delete_by_entry(self.db, entry_id)

                rows = [
                    PaymentAllocation(
                        entry_id=entry_id,
                        person_id=allocation.participant_id,
                        description=allocation.description,
                        amount=allocation.amount,
                        notes=allocation.notes,
                        position=position,
                    )
                    for position, allocation in enumerate(allocations)
                ]
                created = await AllocationRepository.create_batch(self.db, rows)

            await self.db.commit()
        except SQLAlchemyError as exc:
            await self.db.rollback()
            raise PersistenceError("Could not save allocations", details=str(exc)) from exc

        logger.debug("Entry %s: replaced %d allocation(s) with %d", entry_id, deleted, len(created))
