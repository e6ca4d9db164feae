"""Loyalty points calculator.

A receipt's score is the sum of independent rules, each looking at one
part of the receipt:

* ``retailer_name`` – one point per ASCII letter or digit in the
  retailer name.
* ``round_dollar`` – 50 points if the total has no cents.
* ``quarter_multiple`` – 25 points if the total is a multiple of
  ``0.25``.  A round-dollar total always earns this as well.
* ``item_pairs`` – 5 points for every two items.
* ``description_length`` – for every item whose trimmed description
  length is a multiple of 3, the price multiplied by ``0.2`` and
  rounded up.
* ``odd_day`` – 6 points if the day of the purchase date is odd.
* ``afternoon`` – 10 points if the purchase time is after 14:00 and
  before 16:00.

Rules never raise: a total, price, date or time that cannot be parsed
simply makes the rule depending on it contribute nothing.  Amounts are
handled as :class:`~decimal.Decimal` so divisibility checks are exact.
"""

from __future__ import annotations

import logging
import math
import re
from decimal import Decimal, localcontext
from typing import Callable, List, Tuple

from receipt_points.models.schemas import ReceiptBase, RuleScore
from receipt_points.utils.helpers import (
    parse_amount,
    parse_purchase_date,
    parse_purchase_time,
)

logger = logging.getLogger(__name__)

ROUND_DOLLAR_POINTS = 50
QUARTER_MULTIPLE_POINTS = 25
QUARTERS_PER_DOLLAR = 4
POINTS_PER_ITEM_PAIR = 5
DESCRIPTION_MULTIPLE = 3
DESCRIPTION_PRICE_MULTIPLIER = Decimal("0.2")
ODD_DAY_POINTS = 6
AFTERNOON_POINTS = 10
AFTERNOON_START_HOUR = 14
AFTERNOON_END_HOUR = 16

_ALPHANUMERIC = re.compile(r"[A-Za-z0-9]")


def _scale(amount: Decimal, factor: Decimal | int) -> Decimal:
    """Multiply ``amount`` by a one-digit ``factor`` without rounding."""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, len(amount.as_tuple().digits) + 2)
        return amount * factor


def _is_whole(amount: Decimal) -> bool:
    return amount == amount.to_integral_value()


def _retailer_name(receipt: ReceiptBase) -> int:
    return len(_ALPHANUMERIC.findall(receipt.retailer or ""))


def _round_dollar(receipt: ReceiptBase) -> int:
    total = parse_amount(receipt.total)
    if total is None:
        logger.debug("Unparsable total %r, skipping round dollar rule", receipt.total)
        return 0
    return ROUND_DOLLAR_POINTS if _is_whole(total) else 0


def _quarter_multiple(receipt: ReceiptBase) -> int:
    total = parse_amount(receipt.total)
    if total is None:
        logger.debug("Unparsable total %r, skipping quarter multiple rule", receipt.total)
        return 0
    return QUARTER_MULTIPLE_POINTS if _is_whole(_scale(total, QUARTERS_PER_DOLLAR)) else 0


def _item_pairs(receipt: ReceiptBase) -> int:
    return POINTS_PER_ITEM_PAIR * (len(receipt.items) // 2)


def _description_length(receipt: ReceiptBase) -> int:
    points = 0
    for item in receipt.items:
        if len(item.short_description.strip()) % DESCRIPTION_MULTIPLE != 0:
            continue
        price = parse_amount(item.price)
        if price is None:
            logger.debug("Unparsable price %r for item %r", item.price, item.short_description)
            continue
        points += math.ceil(_scale(price, DESCRIPTION_PRICE_MULTIPLIER))
    return points


def _odd_day(receipt: ReceiptBase) -> int:
    purchased_on = parse_purchase_date(receipt.purchase_date)
    if purchased_on is None:
        logger.debug("Unparsable purchase date %r, skipping odd day rule", receipt.purchase_date)
        return 0
    return ODD_DAY_POINTS if purchased_on.day % 2 == 1 else 0


def _afternoon(receipt: ReceiptBase) -> int:
    purchased_at = parse_purchase_time(receipt.purchase_time)
    if purchased_at is None:
        logger.debug("Unparsable purchase time %r, skipping afternoon rule", receipt.purchase_time)
        return 0
    if AFTERNOON_START_HOUR <= purchased_at.hour < AFTERNOON_END_HOUR:
        return AFTERNOON_POINTS
    return 0


RULES: Tuple[Tuple[str, Callable[[ReceiptBase], int]], ...] = (
    ("retailer_name", _retailer_name),
    ("round_dollar", _round_dollar),
    ("quarter_multiple", _quarter_multiple),
    ("item_pairs", _item_pairs),
    ("description_length", _description_length),
    ("odd_day", _odd_day),
    ("afternoon", _afternoon),
)


def score_breakdown(receipt: ReceiptBase) -> List[RuleScore]:
    """Return every rule's contribution to the receipt's points, in rule order."""
    return [RuleScore(rule=name, points=rule(receipt)) for name, rule in RULES]


def compute_points(receipt: ReceiptBase) -> int:
    """Compute the loyalty points awarded for ``receipt``."""
    breakdown = score_breakdown(receipt)
    total = sum(score.points for score in breakdown)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Points for %s: %d (%s)",
            getattr(receipt, "id", "<unsaved>"),
            total,
            ", ".join(f"{s.rule}={s.points}" for s in breakdown),
        )
    return total
