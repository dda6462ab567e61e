"""A cart representing an ongoing purchase.

Products can be added to a cart (not removed). Every rule attached to the
cart is evaluated each time a product is added, which usually results in
discounts being applied to the purchase.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from . import rules as rules_
from .products import Amount, CartItem, Product
from .rules import Rule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Cart:
    """Products added so far (latest first), rule states and raw price."""

    items: tuple[Product, ...] = ()
    rules: tuple[Rule, ...] = ()
    price: Amount = 0


def empty(rules: Iterable[Rule] = ()) -> Cart:
    """Create empty cart, optionally with a set of rules."""
    return Cart(items=(), rules=tuple(rules), price=0)


def add(cart: Cart, products: Product | Iterable[Product]) -> Cart:
    """Add a product or a sequence of them, evaluating rules in the process."""
    if isinstance(products, Product):
        return _add_one(cart, products)
    for product in products:
        cart = _add_one(cart, product)
    return cart


def _add_one(cart: Cart, product: Product) -> Cart:
    logger.debug("Adding %s (%d) to cart", product.code, product.price)
    return Cart(
        items=(product,) + cart.items,
        rules=tuple(rules_.apply(rule, product) for rule in cart.rules),
        price=cart.price + product.price,
    )


def discount_total(cart: Cart) -> Amount:
    """Sum of every active rule's discount items."""
    return sum(rules_.total(rule) for rule in cart.rules)


def total(cart: Cart) -> Amount:
    """Compute cart total amount, taking into account any applied discounts."""
    return cart.price + discount_total(cart)


def items(cart: Cart) -> tuple[CartItem, ...]:
    """Products in the order added, followed by every visible discount item."""
    discounts = tuple(item for rule in cart.rules for item in rules_.items(rule))
    return tuple(reversed(cart.items)) + discounts
