"""Database seeding script (one group, five members, one entry)"""
import asyncio
import sys
from decimal import Decimal
from pathlib import Path

# Add parent directory to path to import loan_ledger modules
sys.path.append(str(Path(__file__).parent.parent))

from sqlalchemy import select
from loan_ledger.database import AsyncSessionLocal, create_tables
from loan_ledger.models import Entry, Group, GroupMember, Person

GROUP_NAME = "Housemates"
MEMBER_NAMES = ["Ana Reyes", "Ben Cruz", "Carla Santos", "Dan Lim", "Eli Tan"]


async def seed():
    """Create the demo group and an entry to allocate, if missing"""

    await create_tables()

    async with AsyncSessionLocal() as session:
        result = await session.execute(select(Group).where(Group.group_name == GROUP_NAME))
        if result.scalar_one_or_none():
            print(f"  ⏭️  Group '{GROUP_NAME}' already exists, skipping...")
            return

        group = Group(group_name=GROUP_NAME)
        session.add(group)
        await session.flush()

        for name in MEMBER_NAMES:
            person = Person(full_name=name)
            session.add(person)
            await session.flush()
            session.add(GroupMember(group_id=group.group_id, person_id=person.person_id))
            print(f"  ✅ Created person '{name}'")

        entry = Entry(
            entry_name="Electricity bill",
            amount_borrowed=Decimal("3250.00"),
            borrower_group_id=group.group_id,
        )
        session.add(entry)
        await session.commit()

        print(f"\n📊 Summary:")
        print(f"  Group: {GROUP_NAME} ({len(MEMBER_NAMES)} members)")
        print(f"  Entry: {entry.entry_id} ({entry.amount_borrowed})")


async def main():
    """Main function to run seeding"""
    print("🌱 Seeding database with a demo group...\n")

    try:
        await seed()
        print("\n✨ Database seeding completed successfully!")
    except Exception as e:
        print(f"\n❌ Error seeding database: {str(e)}")
        raise


if __name__ == "__main__":
    asyncio.run(main())
