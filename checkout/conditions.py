"""Stateful conditions deciding when a rule fires.

A condition is a small tree evaluated once per product added to a cart:

  - AnyCondition: always holds
  - ProductEquals: holds when the product has a given code (and inner holds)
  - EveryNth: holds on every n-th product reaching it (and inner holds)
  - AfterCount: holds once more than `threshold` products reached it

Conditions never mutate. `check` returns the verdict together with the
condition to use for the next product; callers must thread it forward.

Example: every second green tea is free

    every_nth(2, product_equals("GR1"))

Note that the outer condition sees every product, so the counter above
advances on any product and the code is only checked on the 2nd, 4th, ...
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from .products import Product, ProductCode

# ---------------------------------------------------------------------------
# Condition AST
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AnyCondition:
    """Condition which always holds. Stateless; use the ``ANY`` singleton."""


ANY = AnyCondition()


@dataclass(frozen=True)
class ProductEquals:
    """Holds when the product code matches and `inner` holds.

    `inner` only sees matching products, so its counters count those alone.
    """

    code: ProductCode
    inner: Condition = ANY


@dataclass(frozen=True)
class EveryNth:
    """Holds on every `nth` product that reaches it, if `inner` holds then.

    `counter` runs 0..nth-1; `inner` is evaluated only on the n-th product.
    """

    nth: int
    counter: int = 0
    inner: Condition = ANY


@dataclass(frozen=True)
class AfterCount:
    """Holds once `counter >= threshold`, i.e. from product threshold+1 on.

    The counter advances on every evaluation and never resets.
    """

    threshold: int
    counter: int = 0
    inner: Condition = ANY


# Union of all condition forms
Condition = AnyCondition | ProductEquals | EveryNth | AfterCount


# ---------------------------------------------------------------------------
# Constructors
# ---------------------------------------------------------------------------


def _require_positive(name: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be a positive integer, got {value!r}")
    if value <= 0:
        raise ValueError(f"{name} must be a positive integer, got {value}")
    return value


def any_product() -> AnyCondition:
    return ANY


def product_equals(code: ProductCode, inner: Condition = ANY) -> ProductEquals:
    return ProductEquals(code=code, inner=inner)


def every_nth(nth: int, inner: Condition = ANY) -> EveryNth:
    """Condition which checks `inner` on every `nth` evaluated product."""
    return EveryNth(nth=_require_positive("nth", nth), counter=0, inner=inner)


def after_count(threshold: int, inner: Condition = ANY) -> AfterCount:
    """Condition which checks `inner` once `threshold` products went by."""
    return AfterCount(
        threshold=_require_positive("threshold", threshold), counter=0, inner=inner
    )


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------


def check(condition: Condition, product: Product) -> tuple[bool, Condition]:
    """Evaluate `condition` on `product`, returning (holds, next condition)."""
    match condition:
        case AnyCondition():
            return True, condition
        case ProductEquals(code=code, inner=inner):
            if product.code != code:
                return False, condition
            applies, inner = check(inner, product)
            return applies, replace(condition, inner=inner)
        case EveryNth(nth=nth, counter=counter, inner=inner):
            if counter + 1 != nth:
                return False, replace(condition, counter=counter + 1)
            applies, inner = check(inner, product)
            return applies, replace(condition, counter=0, inner=inner)
        case AfterCount(threshold=threshold, counter=counter, inner=inner):
            if counter < threshold:
                return False, replace(condition, counter=counter + 1)
            applies, inner = check(inner, product)
            return applies, replace(condition, counter=counter + 1, inner=inner)
    raise TypeError(f"Unknown condition type: {type(condition)}")


def _ordinal(n: int) -> str:
    if 10 <= n % 100 <= 20:
        suffix = "th"
    else:
        suffix = {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")
    return f"{n}{suffix}"


def describe(condition: Condition) -> str:
    """Human-readable rendering, e.g. ``every 2nd of (product GR1)``."""
    match condition:
        case AnyCondition():
            return "any product"
        case ProductEquals(code=code, inner=AnyCondition()):
            return f"product {code}"
        case ProductEquals(code=code, inner=inner):
            return f"product {code} and ({describe(inner)})"
        case EveryNth(nth=nth, inner=AnyCondition()):
            return f"every {_ordinal(nth)} product"
        case EveryNth(nth=nth, inner=inner):
            return f"every {_ordinal(nth)} of ({describe(inner)})"
        case AfterCount(threshold=threshold, inner=AnyCondition()):
            return f"after {threshold} products"
        case AfterCount(threshold=threshold, inner=inner):
            return f"after {threshold} of ({describe(inner)})"
    raise TypeError(f"Unknown condition type: {type(condition)}")
