"""Base strategy interface"""

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import List

from loan_ledger.schemas.allocation import AllocationLineItem, Participant


class BaseSplitStrategy(ABC):
    """Base class for split strategies"""

    @abstractmethod
    def generate_items(
        self,
        total_amount: Decimal,
        participants: List[Participant],
        description: str,
    ) -> List[AllocationLineItem]:
        """
        Generate the initial line items for a fresh allocation.

        Args:
            total_amount: Total expense amount
            participants: Eligible participants, in display order
            description: Description given to every generated item

        Returns:
            One line item per participant
        """
        pass
