"""checkout: a point-of-sale cart with incrementally evaluated discount rules."""

from .products import (
    Amount,
    CartItem,
    DiscountItem,
    Product,
    ProductCode,
)
from .conditions import (
    ANY,
    AfterCount,
    AnyCondition,
    Condition,
    EveryNth,
    ProductEquals,
    after_count,
    any_product,
    every_nth,
    product_equals,
)
from .discounts import (
    Bulk,
    Discount,
    DiscountAmount,
    DiscountSpec,
    absolute,
    bulk,
    percents,
    share,
)
from .rules import Rule, new_rule
from .cart import Cart, empty
from .price_sheet import PriceSheet, load_price_sheet
from .serialization import dumps_rules, load_rules, loads_rules
from .result import Ok, Err, Result

__all__ = [
    # Products
    "Amount", "CartItem", "DiscountItem", "Product", "ProductCode",
    # Conditions
    "ANY", "AfterCount", "AnyCondition", "Condition", "EveryNth",
    "ProductEquals", "after_count", "any_product", "every_nth", "product_equals",
    # Discounts
    "Bulk", "Discount", "DiscountAmount", "DiscountSpec",
    "absolute", "bulk", "percents", "share",
    # Rules and cart
    "Rule", "new_rule", "Cart", "empty",
    # Price sheets
    "PriceSheet", "load_price_sheet",
    # Serialization
    "dumps_rules", "loads_rules", "load_rules",
    # Result
    "Ok", "Err", "Result",
]
