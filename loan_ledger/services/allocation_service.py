"""Allocation business logic"""
import logging
from typing import List

from loan_ledger.config import get_settings
from loan_ledger.core.exceptions import PersistenceError, ValidationError
from loan_ledger.schemas.allocation import (AllocationLineItem, EngineState,
                                            FinalizedAllocation, SplitMode)
from loan_ledger.schemas.draft import ExpenseContext
from loan_ledger.services.allocation_engine import AllocationEngine
from loan_ledger.services.allocation_store import (AllocationStore,
                                                   ParticipantSource)
from loan_ledger.utils.decimal_utils import HUNDRED, round_decimal

logger = logging.getLogger(__name__)


class AllocationService:
    """
    Connects the allocation engine to its store and participant source.

    Both the "new split" and "edit existing split" flows go through this
    one class; they differ only in the mode they open the draft with.
    """

    def __init__(self, store: AllocationStore, participants: ParticipantSource):
        self.store = store
        self.participants = participants

    async def open_draft(self, context: ExpenseContext, mode: SplitMode) -> EngineState:
        """
        Start an allocation session for an expense.

        Saved allocations are only loaded in percent mode, where the draft
        edits the existing split.

        Args:
            context: Expense being allocated
            mode: Split mode

        Returns:
            Initial engine state
        """
        settings = get_settings()
        participants = await self.participants.list_eligible(context)

        existing: List[AllocationLineItem] = []
        if mode == SplitMode.PERCENT:
            existing = await self.store.load_existing(context.entry_id)

        if not participants:
            logger.info("Entry %s has no eligible participants", context.entry_id)

        return AllocationEngine.init(
            context.total_amount,
            participants,
            mode,
            existing_allocations=existing,
            expense_name=context.entry_name or settings.default_allocation_description,
            tolerance=settings.allocation_tolerance,
        )

    async def save(self, context: ExpenseContext, state: EngineState) -> List[FinalizedAllocation]:
        """
        Validate a draft and replace the entry's saved allocations with it.

        The draft must be for the entry's current total, and participant
        names are resolved against the current participant list, not the
        list the draft was opened with.

        Args:
            context: Expense being allocated
            state: Draft to save

        Returns:
            Finalized allocations that were saved

        Raises:
            ValidationError: If the draft total is not the entry total
            AllocationValidationError: If the draft is not valid
            PersistenceError: If the store could not save; not retried
        """
        expected = round_decimal(context.total_amount)
        if round_decimal(state.total_amount) != expected:
            raise ValidationError(
                f"Draft total {round_decimal(state.total_amount)} does not match "
                f"entry total {expected}; reopen the draft",
                details={"draft_total": str(state.total_amount), "entry_total": str(expected)},
            )

        participants = await self.participants.list_eligible(context)
        state = state.model_copy(update={"participants": participants})

        result = AllocationEngine.submit(state)
        if not result.ok:
            raise result.error

        try:
            await self.store.replace_all(context.entry_id, result.allocations)
        except PersistenceError:
            logger.error("Saving allocations for entry %s failed", context.entry_id, exc_info=True)
            raise

        logger.info("Saved %d allocation(s) for entry %s", len(result.allocations), context.entry_id)
        return result.allocations

    async def load_saved(self, context: ExpenseContext) -> List[AllocationLineItem]:
        """
        Get saved allocations with their share of the total.

        Args:
            context: Expense whose allocations to load

        Returns:
            Line items with percent set to a rounded share of the total
        """
        saved = await self.store.load_existing(context.entry_id)
        return [
            item.model_copy(
                update={"percent": round_decimal(item.amount / context.total_amount * HUNDRED)}
            )
            for item in saved
        ]
