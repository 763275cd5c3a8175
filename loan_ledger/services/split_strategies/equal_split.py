"""Equal split strategy"""

from decimal import Decimal
from typing import List

from loan_ledger.schemas.allocation import AllocationLineItem, Participant
from loan_ledger.services.split_strategies.base import BaseSplitStrategy
from loan_ledger.utils.decimal_utils import split_evenly


class EqualSplitStrategy(BaseSplitStrategy):
    """Strategy for splitting expense equally among participants"""

    def generate_items(
        self,
        total_amount: Decimal,
        participants: List[Participant],
        description: str,
    ) -> List[AllocationLineItem]:
        """
        Give every participant the same share.

        The last participant absorbs the rounding remainder so the shares
        add up to the rounded total exactly.
        """
        amounts = split_evenly(total_amount, len(participants))

        return [
            AllocationLineItem(
                participant_id=participant.id,
                participant_name=participant.display_name,
                description=description,
                amount=amount,
                notes="",
            )
            for participant, amount in zip(participants, amounts)
        ]
