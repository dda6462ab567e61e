"""Discount definitions and their monetary effect.

A discount amount is either

  - an exact integer: an absolute offset, independent of price
  - an exact Fraction: a share of the price it is applied to

Fractions keep "1/3 off" exact until the final truncation toward zero, so
no intermediate rounding ever leaks into the result.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from fractions import Fraction

from .products import Amount

DiscountAmount = int | Fraction


@dataclass(frozen=True)
class Discount:
    """A discount producing one item per qualifying product.

    Example: Discount(-50)               # 50 off each product
    Example: Discount(Fraction(-1, 3))   # a third off each product
    """

    amount: DiscountAmount = 0


@dataclass(frozen=True)
class Bulk:
    """A discount recomputed from the running total of qualifying products.

    A bulk rule only ever produces a single item; `running_total` is the sum
    of prices of every product that qualified so far.
    """

    discount: Discount
    running_total: Amount = 0


DiscountSpec = Discount | Bulk


def absolute(amount: Amount) -> Discount:
    """Express discount in absolute currency units."""
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise TypeError(f"Absolute discount must be an integer, got {amount!r}")
    return Discount(amount=amount)


def share(parts: int, of: int) -> Discount:
    """Express discount as a share of product or total price."""
    for label, value in (("parts", parts), ("of", of)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"Share {label} must be an integer, got {value!r}")
    if of <= 0:
        raise ValueError(f"Share denominator must be positive, got {of}")
    return Discount(amount=Fraction(parts, of))


def percents(percents: int) -> Discount:
    """Express discount as a number of percents of product or total price."""
    return share(percents, 100)


def bulk(discount: Discount) -> Bulk:
    """Mark a discount as bulk: one item for any number of products."""
    return Bulk(discount=discount, running_total=0)


def compute(discount: Discount, price: Amount) -> Amount:
    """Compute discounted amount in absolute currency units."""
    match discount.amount:
        case Fraction() as ratio:
            return math.trunc(Fraction(price) * ratio)
        case int() as amount:
            return amount
    raise TypeError(f"Unknown discount amount type: {type(discount.amount)}")
