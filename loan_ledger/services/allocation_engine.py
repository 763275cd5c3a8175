"""Expense allocation engine"""

import logging
from decimal import Decimal
from typing import Dict, List, Optional, Sequence, Union
from uuid import UUID

from loan_ledger.core.exceptions import (AllocationValidationError,
                                         AmountMismatchError,
                                         EmptyAllocationError,
                                         MissingDescriptionError,
                                         NotFoundError,
                                         PercentMismatchError,
                                         ValidationError)
from loan_ledger.schemas.allocation import (AllocationItemUpdate,
                                            AllocationLineItem, EngineState,
                                            FinalizedAllocation, Participant,
                                            SplitMode, SubmitResult)
from loan_ledger.services.rebalance import (rebalance_values,
                                            scale_proportionally)
from loan_ledger.services.split_strategies import get_split_strategy
from loan_ledger.utils.decimal_utils import (CENT, HUNDRED, nearly_equal,
                                             round_decimal, split_evenly,
                                             sum_decimals, to_decimal)

logger = logging.getLogger(__name__)

DEFAULT_DESCRIPTION = "Expense"

ItemChanges = Union[AllocationItemUpdate, dict]


class AllocationEngine:
    """
    Splits an expense total among participants and keeps the split consistent.

    Every operation takes an EngineState and returns a new one; the input
    state is never modified, so abandoning a state discards the edits.
    """

    @staticmethod
    def init(
        total_amount: Union[Decimal, int, float, str],
        participants: Sequence[Participant],
        mode: Union[SplitMode, str],
        existing_allocations: Optional[Sequence[AllocationLineItem]] = None,
        expense_name: Optional[str] = None,
        tolerance: Decimal = CENT,
    ) -> EngineState:
        """
        Start an allocation session.

        Percent mode with saved allocations edits the saved split; every
        other combination generates fresh items, one per participant.
        Nothing is validated here; invalid totals are reported by submit.

        Args:
            total_amount: Expense total
            participants: Eligible participants, in display order
            mode: Split mode
            existing_allocations: Previously saved items (percent mode only)
            expense_name: Default description for generated items
            tolerance: Allowed distance from the target at submit

        Returns:
            Initial engine state
        """
        total = to_decimal(total_amount)
        mode = SplitMode(mode)

        if mode == SplitMode.PERCENT and existing_allocations:
            items = [
                AllocationEngine._seed_percent(item, total)
                for item in existing_allocations
            ]
            logger.debug("Seeded percent allocation from %d saved item(s)", len(items))
        else:
            strategy = get_split_strategy(mode)
            items = strategy.generate_items(
                total, list(participants), expense_name or DEFAULT_DESCRIPTION
            )
            logger.debug(
                "Generated %d item(s) in %s mode for %s", len(items), mode.value, total
            )

        return EngineState(
            total_amount=total,
            mode=mode,
            participants=list(participants),
            items=items,
            expense_name=expense_name,
            tolerance=tolerance,
        )

    @staticmethod
    def _seed_percent(item: AllocationLineItem, total: Decimal) -> AllocationLineItem:
        """Copy a saved item, deriving its percent from the amount if missing"""
        if item.percent is not None:
            return item.model_copy()

        percent = item.amount / total * HUNDRED if total > 0 else Decimal("0")
        return item.model_copy(update={"percent": percent})

    @staticmethod
    def _check_index(state: EngineState, index: int) -> None:
        if index < 0 or index >= len(state.items):
            raise NotFoundError(f"Allocation item {index} does not exist")

    @staticmethod
    def _participant_names(state: EngineState) -> Dict[UUID, str]:
        return {p.id: p.display_name for p in state.participants}

    @staticmethod
    def update_item(state: EngineState, index: int, changes: ItemChanges) -> EngineState:
        """
        Merge changes into one line item.

        Only the edited item changes; siblings are never rebalanced as a
        side effect. In percent mode a new percent re-derives the amount
        and a new amount re-derives the percent. In amount mode the
        percent is recomputed for display only.

        Args:
            state: Current state
            index: Position of the item
            changes: Fields to change

        Returns:
            New state

        Raises:
            NotFoundError: If index is out of range
            ValidationError: If amount or percent is edited in equal mode
        """
        AllocationEngine._check_index(state, index)
        if isinstance(changes, dict):
            changes = AllocationItemUpdate.model_validate(changes)

        updates = changes.model_dump(exclude_unset=True)
        for key in ("amount", "description", "participant_name"):
            if key in updates and updates[key] is None:
                del updates[key]

        if state.mode == SplitMode.EQUAL and ("amount" in updates or "percent" in updates):
            raise ValidationError(
                "Amounts are fixed in equal mode; switch mode to edit amounts"
            )

        if "participant_id" in updates and "participant_name" not in updates:
            names = AllocationEngine._participant_names(state)
            updates["participant_name"] = names.get(updates["participant_id"], "")

        total = state.total_amount
        item = state.items[index].model_copy(update=updates)

        if updates.get("percent") is not None and state.mode == SplitMode.PERCENT:
            item.percent = round_decimal(updates["percent"])
            item.amount = round_decimal(total * item.percent / HUNDRED)

        if "amount" in updates and state.mode in (SplitMode.AMOUNT, SplitMode.PERCENT):
            item.amount = round_decimal(updates["amount"])
            if total > 0:
                item.percent = round_decimal(item.amount / total * HUNDRED)

        items = list(state.items)
        items[index] = item
        logger.debug("Updated item %d: %s", index, sorted(updates))
        return state.model_copy(update={"items": items})

    @staticmethod
    def add_item(state: EngineState) -> EngineState:
        """Append a blank line item for the first participant (if any)."""
        first = state.participants[0] if state.participants else None
        item = AllocationLineItem(
            participant_id=first.id if first else None,
            participant_name=first.display_name if first else "",
            description="",
            amount=Decimal("0"),
            notes="",
        )
        return state.model_copy(update={"items": [*state.items, item]})

    @staticmethod
    def remove_item(state: EngineState, index: int) -> EngineState:
        """Drop the item at index. Totals are left for the user to fix."""
        AllocationEngine._check_index(state, index)
        items = [item for i, item in enumerate(state.items) if i != index]
        return state.model_copy(update={"items": items})

    @staticmethod
    def switch_mode(state: EngineState, mode: Union[SplitMode, str]) -> EngineState:
        """
        Restart the session in another mode.

        Switching to percent mode keeps the current items and derives
        their percentages; other modes regenerate items from participants.
        """
        mode = SplitMode(mode)
        existing = state.items if mode == SplitMode.PERCENT else None
        return AllocationEngine.init(
            state.total_amount,
            state.participants,
            mode,
            existing_allocations=existing,
            expense_name=state.expense_name,
            tolerance=state.tolerance,
        )

    @staticmethod
    def _target(state: EngineState) -> Decimal:
        if state.mode == SplitMode.PERCENT:
            return HUNDRED
        return round_decimal(state.total_amount)

    @staticmethod
    def _values(state: EngineState) -> List[Decimal]:
        if state.mode == SplitMode.PERCENT:
            return [item.percent or Decimal("0") for item in state.items]
        return [item.amount for item in state.items]

    @staticmethod
    def _apply_values(state: EngineState, values: List[Decimal]) -> EngineState:
        """Write rebalanced values back; in percent mode amounts follow percents"""
        items = []
        current = AllocationEngine._values(state)
        for item, old, value in zip(state.items, current, values):
            if value == old:
                items.append(item)
            elif state.mode == SplitMode.PERCENT:
                amount = round_decimal(state.total_amount * value / HUNDRED)
                items.append(item.model_copy(update={"percent": value, "amount": amount}))
            else:
                items.append(item.model_copy(update={"amount": value}))
        return state.model_copy(update={"items": items})

    @staticmethod
    def rebalance(state: EngineState) -> EngineState:
        """
        Bring the set back to 100% (percent mode) or the total (amount mode).

        Typed values are kept whenever blank items can absorb the
        difference. Equal mode is already balanced and is returned as is.
        """
        if state.mode == SplitMode.EQUAL or not state.items:
            return state

        values = rebalance_values(
            AllocationEngine._values(state),
            AllocationEngine._target(state),
            state.tolerance,
        )
        return AllocationEngine._apply_values(state, values)

    @staticmethod
    def rebalance_others(state: EngineState, index: int, changes: ItemChanges) -> EngineState:
        """
        Edit one item and rescale every other item around it.

        The other items keep their ratios to each other and together take
        whatever the edited item leaves of the target.

        Args:
            state: Current state
            index: Position of the edited item
            changes: Fields to change on that item

        Returns:
            New state

        Raises:
            ValidationError: In equal mode, or if the edited value is not
                strictly between zero and the target
        """
        if state.mode == SplitMode.EQUAL:
            raise ValidationError("Switch to amount or percent mode to rebalance")

        state = AllocationEngine.update_item(state, index, changes)
        target = AllocationEngine._target(state)
        values = AllocationEngine._values(state)
        pinned = values[index]

        if pinned <= 0:
            raise ValidationError("Amount must be greater than 0")
        if pinned >= target:
            raise ValidationError(f"Amount cannot exceed total expense ({target})")

        others = [i for i in range(len(values)) if i != index]
        if not others:
            return state

        remaining = target - pinned
        current = [values[i] for i in others]
        if sum_decimals(current) > 0:
            scaled = scale_proportionally(current, remaining)
        else:
            scaled = split_evenly(remaining, len(others))

        for i, value in zip(others, scaled):
            values[i] = value

        logger.debug("Rescaled %d item(s) around item %d", len(others), index)
        return AllocationEngine._apply_values(state, values)

    @staticmethod
    def get_total(state: EngineState) -> Decimal:
        """Sum of percents in percent mode, of amounts otherwise."""
        return sum_decimals(AllocationEngine._values(state))

    @staticmethod
    def validate(state: EngineState) -> None:
        """
        Check that the allocation can be saved.

        Raises:
            EmptyAllocationError: No items
            PercentMismatchError: Percents do not sum to 100
            AmountMismatchError: Amounts do not sum to the total
            MissingDescriptionError: An item has a blank description
        """
        if not state.items:
            raise EmptyAllocationError()

        total = AllocationEngine.get_total(state)
        if state.mode == SplitMode.PERCENT:
            if not nearly_equal(total, HUNDRED, state.tolerance):
                raise PercentMismatchError(total)
        elif state.mode == SplitMode.AMOUNT:
            if not nearly_equal(total, state.total_amount, state.tolerance):
                raise AmountMismatchError(total, state.total_amount)

        missing = [i for i, item in enumerate(state.items) if not item.description.strip()]
        if missing:
            raise MissingDescriptionError(missing)

    @staticmethod
    def is_valid(state: EngineState) -> bool:
        try:
            AllocationEngine.validate(state)
        except AllocationValidationError:
            return False
        return True

    @staticmethod
    def submit(state: EngineState) -> SubmitResult:
        """
        Validate and produce the finalized allocations.

        Validation failures are returned in the result, not raised.
        Participant names are re-read from the participant list; an item
        whose participant is no longer listed keeps its cached name.

        Args:
            state: Current state

        Returns:
            SubmitResult with either allocations and draft, or error
        """
        try:
            AllocationEngine.validate(state)
        except AllocationValidationError as exc:
            logger.warning("Allocation rejected: %s", exc.message)
            return SubmitResult(ok=False, error=exc)

        names = AllocationEngine._participant_names(state)
        draft = []
        allocations = []

        for item in state.items:
            name = names.get(item.participant_id)
            if name is None:
                logger.warning(
                    "Participant %s is no longer eligible; keeping name %r",
                    item.participant_id,
                    item.participant_name,
                )
                name = item.participant_name

            amount = round_decimal(item.amount)
            draft.append(item.model_copy(update={"participant_name": name, "amount": amount}))

            percent = None
            if state.mode == SplitMode.PERCENT and item.percent is not None:
                percent = round_decimal(item.percent)

            allocations.append(
                FinalizedAllocation(
                    participant_id=item.participant_id,
                    participant_name=name,
                    description=item.description.strip(),
                    amount=amount,
                    percent=percent,
                    notes=(item.notes or "").strip() or None,
                )
            )

        logger.info(
            "Allocation finalized: %d item(s), %s mode, total %s",
            len(allocations),
            state.mode.value,
            sum_decimals(a.amount for a in allocations),
        )
        return SubmitResult(ok=True, allocations=allocations, draft=draft)
