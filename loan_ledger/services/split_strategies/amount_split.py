"""Fixed-amount split strategy"""
from decimal import Decimal
from typing import List

from loan_ledger.schemas.allocation import AllocationLineItem, Participant
from loan_ledger.services.split_strategies.base import BaseSplitStrategy


class AmountSplitStrategy(BaseSplitStrategy):
    """Strategy for splits where the user types each amount"""

    def generate_items(
        self,
        total_amount: Decimal,
        participants: List[Participant],
        description: str,
    ) -> List[AllocationLineItem]:
        """Every participant starts at zero; nothing is distributed automatically."""
        return [
            AllocationLineItem(
                participant_id=participant.id,
                participant_name=participant.display_name,
                description=description,
                amount=Decimal("0"),
                notes="",
            )
            for participant in participants
        ]
