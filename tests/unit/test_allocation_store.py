"""Unit tests for the SQL-backed allocation store and participant source"""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch
from uuid import uuid4

import pytest
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from loan_ledger.core.exceptions import PersistenceError
from loan_ledger.schemas.allocation import FinalizedAllocation
from loan_ledger.schemas.draft import ExpenseContext
from loan_ledger.services.allocation_store import (SqlAllocationStore,
                                                   SqlParticipantSource)


@pytest.fixture
def mock_db():
    """Create mock database session"""
    db = AsyncMock()
    # Mock begin_nested to return an async context manager (not a coroutine)
    nested_transaction = MagicMock()
    nested_transaction.__aenter__ = AsyncMock(return_value=nested_transaction)
    nested_transaction.__aexit__ = AsyncMock(return_value=None)
    db.begin_nested = MagicMock(return_value=nested_transaction)
    return db


@pytest.fixture
def finalized(participants):
    """Two finalized allocations"""
    return [
        FinalizedAllocation(
            participant_id=participants[0].id,
            participant_name=participants[0].display_name,
            description="Rice",
            amount=Decimal("120.00"),
        ),
        FinalizedAllocation(
            participant_id=participants[1].id,
            participant_name=participants[1].display_name,
            description="Fish",
            amount=Decimal("180.00"),
            notes="paid in cash",
        ),
    ]


def saved_row(person_id, name, amount, notes=None):
    row = MagicMock()
    row.person_id = person_id
    row.person.full_name = name
    row.description = "Groceries"
    row.amount = amount
    row.notes = notes
    return row


class TestSqlParticipantSource:
    """Test participant lookup"""

    @pytest.mark.asyncio
    @patch("loan_ledger.services.allocation_store.ParticipantRepository")
    async def test_list_group_members(self, mock_repo, mock_db, expense_context):
        """Test group members become participants"""
        person_id = uuid4()
        member = MagicMock(person_id=person_id, full_name="Ana Reyes")
        mock_repo.list_group_members = AsyncMock(return_value=[member])

        participants = await SqlParticipantSource(mock_db).list_eligible(expense_context)

        assert len(participants) == 1
        assert participants[0].id == person_id
        assert participants[0].display_name == "Ana Reyes"
        mock_repo.list_group_members.assert_awaited_once_with(mock_db, expense_context.group_id)

    @pytest.mark.asyncio
    @patch("loan_ledger.services.allocation_store.ParticipantRepository")
    async def test_entry_without_group(self, mock_repo, mock_db):
        """Test an entry with no borrower group has nobody to allocate to"""
        mock_repo.list_group_members = AsyncMock()
        context = ExpenseContext(entry_id=uuid4(), total_amount=Decimal("10.00"))

        assert await SqlParticipantSource(mock_db).list_eligible(context) == []
        mock_repo.list_group_members.assert_not_called()


class TestLoadExisting:
    """Test reading saved allocations"""

    @pytest.mark.asyncio
    @patch("loan_ledger.services.allocation_store.AllocationRepository")
    async def test_rows_become_line_items(self, mock_repo, mock_db):
        """Test saved rows map to line items without a percent"""
        person_id = uuid4()
        mock_repo.get_by_entry = AsyncMock(
            return_value=[saved_row(person_id, "Ben Cruz", Decimal("75.50"))]
        )

        items = await SqlAllocationStore(mock_db).load_existing(uuid4())

        assert len(items) == 1
        assert items[0].participant_id == person_id
        assert items[0].participant_name == "Ben Cruz"
        assert items[0].amount == Decimal("75.50")
        assert items[0].percent is None
        assert items[0].notes == ""

    @pytest.mark.asyncio
    @patch("loan_ledger.services.allocation_store.AllocationRepository")
    async def test_database_error(self, mock_repo, mock_db):
        """Test database failures are reported as PersistenceError"""
        mock_repo.get_by_entry = AsyncMock(side_effect=SQLAlchemyError("connection lost"))

        with pytest.raises(PersistenceError, match="Could not load allocations"):
            await SqlAllocationStore(mock_db).load_existing(uuid4())


class TestReplaceAll:
    """Test replacing saved allocations"""

    @pytest.mark.asyncio
    @patch("loan_ledger.services.allocation_store.AllocationRepository")
    async def test_replace_all(self, mock_repo, mock_db, finalized):
        """Test old rows are deleted and new rows written in order"""
        entry_id = uuid4()
        mock_repo.delete_by_entry = AsyncMock(return_value=3)
        mock_repo.create_batch = AsyncMock(side_effect=lambda db, rows: rows)

        await SqlAllocationStore(mock_db).replace_all(entry_id, finalized)

        mock_repo.delete_by_entry.assert_awaited_once_with(mock_db, entry_id)
        rows = mock_repo.create_batch.call_args[0][1]
        assert [row.position for row in rows] == [0, 1]
        assert [row.person_id for row in rows] == [a.participant_id for a in finalized]
        assert [row.amount for row in rows] == [Decimal("120.00"), Decimal("180.00")]
        assert rows[1].notes == "paid in cash"
        assert all(row.entry_id == entry_id for row in rows)
        mock_db.begin_nested.assert_called_once()
        mock_db.commit.assert_awaited_once()
        mock_db.rollback.assert_not_called()

    @pytest.mark.asyncio
    @patch("loan_ledger.services.allocation_store.AllocationRepository")
    async def test_replace_all_rolls_back(self, mock_repo, mock_db, finalized):
        """Test a failed write rolls back and raises PersistenceError"""
        mock_repo.delete_by_entry = AsyncMock(return_value=2)
        mock_repo.create_batch = AsyncMock(
            side_effect=OperationalError("INSERT", {}, Exception("disk full"))
        )

        with pytest.raises(PersistenceError, match="Could not save allocations") as exc_info:
            await SqlAllocationStore(mock_db).replace_all(uuid4(), finalized)

        assert exc_info.value.status_code == 500
        assert exc_info.value.error_type == "PersistenceError"
        mock_db.rollback.assert_awaited_once()
        mock_db.commit.assert_not_called()
