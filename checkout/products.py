"""Things that end up on a receipt.

Amounts are integers in minor currency units (pence, cents). A cart holds
two kinds of line items:

  - Products: what the customer is buying, priced by an external sheet
  - Discount items: synthetic, usually negative-priced lines produced by rules
"""

from __future__ import annotations

from dataclasses import dataclass

Amount = int
"""Money in minor currency units (e.g. pence). Negative for discounts."""

ProductCode = str
"""Short code uniquely identifying a product, e.g. ``"GR1"``."""


@dataclass(frozen=True)
class Product:
    """A purchasable product.

    Example: Product("GR1", "Green tea", 311)
    """

    code: ProductCode
    name: str = "<empty>"
    price: Amount = 0


@dataclass(frozen=True)
class DiscountItem:
    """A discount line produced by a rule.

    Example: DiscountItem("Buy a Green tea get one FREE!", -311)
    """

    name: str = "<empty>"
    amount: Amount = 0


# Union of everything a cart can show
CartItem = Product | DiscountItem


def item_amount(item: CartItem) -> Amount:
    """Signed amount an item contributes to a cart total."""
    match item:
        case Product(price=price):
            return price
        case DiscountItem(amount=amount):
            return amount
    raise TypeError(f"Unknown cart item type: {type(item)}")
