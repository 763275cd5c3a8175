"""Group member data access"""
from typing import List
from uuid import UUID
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from loan_ledger.models.group import GroupMember
from loan_ledger.models.person import Person


class ParticipantRepository:
    """Repository for looking up who can receive an allocation"""

    @staticmethod
    async def list_group_members(db: AsyncSession, group_id: UUID) -> List[Person]:
        """
        Get the members of a group, oldest membership first.

        Args:
            db: Database session
            group_id: Group UUID

        Returns:
            List of persons
        """
        result = await db.execute(
            select(Person)
            .join(GroupMember, GroupMember.person_id == Person.person_id)
            .where(GroupMember.group_id == group_id)
            .order_by(GroupMember.joined_at, Person.full_name)
        )
        return list(result.scalars().all())
