"""Rebalancing of allocation values to a target total"""

import logging
from decimal import Decimal
from typing import List

from loan_ledger.utils.decimal_utils import (CENT, nearly_equal,
                                             round_decimal, split_evenly,
                                             sum_decimals)

logger = logging.getLogger(__name__)


def scale_proportionally(
    values: List[Decimal],
    target: Decimal,
    clamp_last: bool = False,
) -> List[Decimal]:
    """
    Scale values so they keep their ratios and add up to `target`.

    Every value but the last is rounded on its own; the last one takes the
    residual so the result lands exactly on the target.

    Args:
        values: Current values; their sum must be positive
        target: Total the scaled values should reach
        clamp_last: Never let the residual-absorbing value go below zero

    Returns:
        Scaled values, same order as the input
    """
    current_total = sum_decimals(values)
    scaled = []
    distributed = Decimal("0")

    for value in values[:-1]:
        share = round_decimal(target * value / current_total)
        distributed += share
        scaled.append(share)

    last = round_decimal(target - distributed)
    if clamp_last:
        last = max(Decimal("0"), last)
    scaled.append(last)

    return scaled


def rebalance_values(
    values: List[Decimal],
    target: Decimal,
    tolerance: Decimal = CENT,
) -> List[Decimal]:
    """
    Bring a set of values back to `target` without touching typed input.

    A value above zero counts as typed by the user; zero means blank.
    Blanks soak up any shortfall first. Typed values are only scaled
    when there is no blank left to absorb the difference, or when they
    already overshoot the target on their own.

    Calling this again on its own output returns the same values.

    Args:
        values: Current values (percentages or amounts)
        target: Required total (100 or the expense amount)
        tolerance: How far from target an all-typed set may drift before
            it is rescaled

    Returns:
        New list of values
    """
    if not values:
        return []

    with_input = [i for i, value in enumerate(values) if value > 0]
    without_input = [i for i, value in enumerate(values) if value <= 0]

    if not with_input:
        logger.debug("Rebalance: no input, splitting %s evenly over %d", target, len(values))
        return split_evenly(target, len(values))

    sum_with_input = sum_decimals(values[i] for i in with_input)
    remainder = target - sum_with_input
    result = list(values)

    if without_input and remainder > 0:
        logger.debug(
            "Rebalance: giving remainder %s to %d blank item(s)", remainder, len(without_input)
        )
        shares = split_evenly(remainder, len(without_input))
        for index, share in zip(without_input, shares):
            result[index] = share

    elif not without_input and not nearly_equal(sum_with_input, target, tolerance):
        if len(with_input) == 1:
            # Snap a lone value to the target
            logger.debug("Rebalance: single item set to %s", target)
            result[with_input[0]] = round_decimal(target)
        else:
            logger.debug("Rebalance: scaling %s to %s", sum_with_input, target)
            scaled = scale_proportionally([values[i] for i in with_input], target)
            for index, value in zip(with_input, scaled):
                result[index] = value

    elif remainder < 0:
        logger.debug("Rebalance: over-allocated by %s, scaling down", -remainder)
        scaled = scale_proportionally(
            [values[i] for i in with_input], target, clamp_last=True
        )
        for index, value in zip(with_input, scaled):
            result[index] = value

    return result
