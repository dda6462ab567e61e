"""Rules: discounts gated by a precondition and a postcondition.

For each product added to a cart a rule

  1. checks its precondition; if it does not hold, nothing else happens
     (apart from the precondition's own state moving on)
  2. produces a discount item (plain) or recomputes its single item (bulk)
  3. checks its postcondition, which decides whether the items produced so
     far currently count toward the cart total

Rules are immutable; `apply` returns the next version of a rule.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from . import conditions
from .conditions import ANY, Condition
from .discounts import Bulk, Discount, DiscountSpec, compute
from .products import Amount, DiscountItem, Product

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Rule:
    """Stateful rule for discount evaluation.

    `produced` holds every item computed so far, oldest first, whether or
    not the rule is currently active.
    """

    name: str
    definition: DiscountSpec
    precondition: Condition = ANY
    postcondition: Condition = ANY
    active: bool = False
    produced: tuple[DiscountItem, ...] = ()


def new_rule(
    name: str,
    definition: DiscountSpec,
    *,
    precondition: Condition | None = None,
    postcondition: Condition | None = None,
) -> Rule:
    """Construct a named rule given a discount definition.

    Both conditions default to ``ANY``: the rule is evaluated for every
    product and its items count as soon as they are produced.
    """
    return Rule(
        name=name,
        definition=definition,
        precondition=precondition or ANY,
        postcondition=postcondition or ANY,
    )


def apply(rule: Rule, product: Product) -> Rule:
    """Evaluate rule given the next product added to a cart."""
    applies, precondition = conditions.check(rule.precondition, product)
    rule = replace(rule, precondition=precondition)
    if not applies:
        logger.debug("Rule %r skipped %s", rule.name, product.code)
        return rule
    return _check_postcondition(_update(rule, product), product)


def _update(rule: Rule, product: Product) -> Rule:
    match rule.definition:
        case Discount() as discount:
            item = _produce_item(rule, discount, product.price)
            return replace(rule, produced=rule.produced + (item,))
        case Bulk(discount=discount, running_total=running_total):
            running_total += product.price
            item = _produce_item(rule, discount, running_total)
            return replace(
                rule,
                produced=(item,),
                definition=replace(rule.definition, running_total=running_total),
            )
    raise TypeError(f"Unknown discount definition: {type(rule.definition)}")


def _produce_item(rule: Rule, discount: Discount, price: Amount) -> DiscountItem:
    item = DiscountItem(name=rule.name, amount=compute(discount, price))
    logger.debug("Rule %r produced %d from price %d", rule.name, item.amount, price)
    return item


def _check_postcondition(rule: Rule, product: Product) -> Rule:
    active, postcondition = conditions.check(rule.postcondition, product)
    if active != rule.active:
        logger.debug(
            "Rule %r became %s on %s (%s)",
            rule.name,
            "active" if active else "inactive",
            product.code,
            conditions.describe(rule.postcondition),
        )
    return replace(rule, active=active, postcondition=postcondition)


def items(rule: Rule) -> tuple[DiscountItem, ...]:
    """Items suitable to be shown among other cart items."""
    return rule.produced if rule.active else ()


def total(rule: Rule) -> Amount:
    """Effective price offset introduced by this rule so far."""
    return sum(item.amount for item in items(rule))
