"""The reference promotions: three products and three rules.

    Green tea     GR1   £3.11   buy one, get one free
    Strawberries  SR1   £5.00   3 or more: £4.50 each
    Coffee        CF1  £11.23   3 or more: a third off all coffees
"""

from .conditions import after_count, every_nth, product_equals
from .discounts import absolute, bulk, percents, share
from .price_sheet import PriceSheet
from .products import Product
from .rules import Rule, new_rule

GREEN_TEA = Product("GR1", "Green tea", 311)
STRAWBERRIES = Product("SR1", "Strawberries", 500)
COFFEE = Product("CF1", "Coffee", 1123)


def reference_price_sheet() -> PriceSheet:
    return PriceSheet.of(GREEN_TEA, STRAWBERRIES, COFFEE)


def green_tea_rule() -> Rule:
    # every_nth sees every product; the code is only checked on the 2nd, 4th, ...
    return new_rule(
        "Buy a Green tea get one FREE!",
        percents(-100),
        precondition=every_nth(2, product_equals(GREEN_TEA.code)),
    )


def strawberries_rule() -> Rule:
    return new_rule(
        "3+ Strawberries 4.5£ EACH!",
        absolute(-50),
        precondition=product_equals(STRAWBERRIES.code),
        postcondition=after_count(2),
    )


def coffee_rule() -> Rule:
    return new_rule(
        "3+ Coffees 1/3 OFF ALL!",
        bulk(share(-1, 3)),
        precondition=product_equals(COFFEE.code),
        postcondition=after_count(2),
    )


def reference_rules() -> tuple[Rule, ...]:
    return (green_tea_rule(), strawberries_rule(), coffee_rule())
