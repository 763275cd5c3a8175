"""Split generation strategies"""

from loan_ledger.core.exceptions import ValidationError
from loan_ledger.schemas.allocation import SplitMode
from loan_ledger.services.split_strategies.amount_split import \
    AmountSplitStrategy
from loan_ledger.services.split_strategies.base import BaseSplitStrategy
from loan_ledger.services.split_strategies.equal_split import \
    EqualSplitStrategy
from loan_ledger.services.split_strategies.percentage_split import \
    PercentageSplitStrategy


def get_split_strategy(mode: SplitMode) -> BaseSplitStrategy:
    """
    Get appropriate split strategy based on split mode.

    Args:
        mode: Split mode (EQUAL, PERCENT, or AMOUNT)

    Returns:
        Instance of appropriate strategy

    Raises:
        ValidationError: If mode is not recognized
    """
    strategies = {
        SplitMode.EQUAL: EqualSplitStrategy(),
        SplitMode.PERCENT: PercentageSplitStrategy(),
        SplitMode.AMOUNT: AmountSplitStrategy(),
    }

    strategy = strategies.get(mode)
    if strategy is None:
        raise ValidationError(f"Unknown split mode: {mode}")

    return strategy


__all__ = [
    "BaseSplitStrategy",
    "EqualSplitStrategy",
    "PercentageSplitStrategy",
    "AmountSplitStrategy",
    "get_split_strategy",
]
