"""Percentage split strategy"""

from decimal import Decimal
from typing import List

from loan_ledger.schemas.allocation import AllocationLineItem, Participant
from loan_ledger.services.split_strategies.base import BaseSplitStrategy
from loan_ledger.utils.decimal_utils import HUNDRED, round_decimal


class PercentageSplitStrategy(BaseSplitStrategy):
    """Strategy for splitting expense by percentage"""

    def generate_items(
        self,
        total_amount: Decimal,
        participants: List[Participant],
        description: str,
    ) -> List[AllocationLineItem]:
        """
        Start every participant at 100 / n percent.

        Percentages are kept unrounded so they still sum to 100 for any n;
        only the amounts are rounded, with the last participant absorbing
        the remainder.

        Args:
            total_amount: Total expense amount
            participants: Eligible participants
            description: Description for every item

        Returns:
            List of line items with percent and amount set
        """
        num_participants = len(participants)

        if num_participants == 0:
            return []

        base_percent = HUNDRED / num_participants
        rounded_total = round_decimal(total_amount)
        base_amount = round_decimal(total_amount * base_percent / HUNDRED)

        items = []
        for participant in participants:
            items.append(
                AllocationLineItem(
                    participant_id=participant.id,
                    participant_name=participant.display_name,
                    description=description,
                    amount=base_amount,
                    percent=base_percent,
                    notes="",
                )
            )

        # Handle rounding - adjust last participant to ensure total matches
        difference = rounded_total - base_amount * num_participants
        if difference != 0:
            items[-1].amount = round_decimal(base_amount + difference)

        return items
