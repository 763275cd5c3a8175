"""Entry data access"""

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from loan_ledger.models.entry import Entry


class EntryRepository:
    """Repository for Entry database operations"""

    @staticmethod
    async def get_by_id(db: AsyncSession, entry_id: UUID) -> Optional[Entry]:
        """
        Get entry by ID.

        Args:
            db: Database session
            entry_id: Entry UUID

        Returns:
            Entry if found, None otherwise
        """
        result = await db.execute(select(Entry).where(Entry.entry_id == entry_id))
        return result.scalar_one_or_none()
