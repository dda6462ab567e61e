"""JSON serialization for conditions, discounts and rules.

Every type serializes to a dict with a "type" discriminator field. Counters
and bulk running totals are included, so a rule part-way through a cart
round-trips with its state: from_json(to_json(x)) == x.

Decoding goes through the validating constructors, so a rules file
declaring ``"nth": 0`` is rejected just like ``every_nth(0)``.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from dataclasses import replace
from fractions import Fraction
from pathlib import Path
from typing import Any

from .conditions import (
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
from .discounts import Bulk, Discount, DiscountAmount, DiscountSpec, absolute, share
from .products import DiscountItem
from .result import Err, Ok, Result
from .rules import Rule

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Conditions
# ---------------------------------------------------------------------------


def condition_to_json(c: Condition) -> dict[str, Any]:
    if isinstance(c, AnyCondition):
        return {"type": "any"}
    elif isinstance(c, ProductEquals):
        return {"type": "product", "code": c.code, "inner": condition_to_json(c.inner)}
    elif isinstance(c, EveryNth):
        return {
            "type": "every_nth",
            "nth": c.nth,
            "counter": c.counter,
            "inner": condition_to_json(c.inner),
        }
    elif isinstance(c, AfterCount):
        return {
            "type": "after_count",
            "threshold": c.threshold,
            "counter": c.counter,
            "inner": condition_to_json(c.inner),
        }
    raise TypeError(f"Unknown condition type: {type(c)}")


def _require_int(label: str, value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{label} must be an integer, got {value!r}")
    return value


def _require_counter(value: object, limit: int | None = None) -> int:
    """Validate a stored counter: 0 <= counter (< limit, when given)."""
    counter = _require_int("counter", value)
    if counter < 0 or (limit is not None and counter >= limit):
        bound = "" if limit is None else f" and below {limit}"
        raise ValueError(f"counter must be at least 0{bound}, got {counter}")
    return counter


def _inner_from_json(d: dict[str, Any]) -> Condition:
    inner = d.get("inner")
    return any_product() if inner is None else condition_from_json(inner)


def condition_from_json(d: dict[str, Any]) -> Condition:
    t = d["type"]
    if t == "any":
        return any_product()
    elif t == "product":
        return product_equals(d["code"], _inner_from_json(d))
    elif t == "every_nth":
        c = every_nth(d["nth"], _inner_from_json(d))
        return replace(c, counter=_require_counter(d.get("counter", 0), c.nth))
    elif t == "after_count":
        c = after_count(d["threshold"], _inner_from_json(d))
        return replace(c, counter=_require_counter(d.get("counter", 0)))
    raise ValueError(f"Unknown condition type: {t}")


# ---------------------------------------------------------------------------
# Discounts
# ---------------------------------------------------------------------------


def amount_to_json(a: DiscountAmount) -> int | dict[str, int]:
    if isinstance(a, Fraction):
        return {"numerator": a.numerator, "denominator": a.denominator}
    return a


def amount_from_json(v: int | dict[str, int]) -> Discount:
    if isinstance(v, dict):
        return share(v["numerator"], v["denominator"])
    return absolute(v)


def discount_to_json(s: DiscountSpec) -> dict[str, Any]:
    if isinstance(s, Discount):
        return {"type": "discount", "amount": amount_to_json(s.amount)}
    elif isinstance(s, Bulk):
        return {
            "type": "bulk",
            "discount": discount_to_json(s.discount),
            "running_total": s.running_total,
        }
    raise TypeError(f"Unknown discount type: {type(s)}")


def discount_from_json(d: dict[str, Any]) -> DiscountSpec:
    t = d["type"]
    if t == "discount":
        return amount_from_json(d["amount"])
    elif t == "bulk":
        inner = discount_from_json(d["discount"])
        if not isinstance(inner, Discount):
            raise ValueError("Bulk discount cannot wrap another bulk discount")
        running_total = _require_int("running_total", d.get("running_total", 0))
        return Bulk(discount=inner, running_total=running_total)
    raise ValueError(f"Unknown discount type: {t}")


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


def rule_to_json(r: Rule) -> dict[str, Any]:
    return {
        "type": "rule",
        "name": r.name,
        "definition": discount_to_json(r.definition),
        "precondition": condition_to_json(r.precondition),
        "postcondition": condition_to_json(r.postcondition),
        "active": r.active,
        "produced": [{"name": i.name, "amount": i.amount} for i in r.produced],
    }


def rule_from_json(d: dict[str, Any]) -> Rule:
    if d.get("type", "rule") != "rule":
        raise ValueError(f"Expected rule, got {d['type']}")
    pre = d.get("precondition")
    post = d.get("postcondition")
    active = d.get("active", False)
    if not isinstance(active, bool):
        raise TypeError(f"active must be a boolean, got {active!r}")
    definition = discount_from_json(d["definition"])
    produced = tuple(
        DiscountItem(name=i["name"], amount=_require_int("amount", i["amount"]))
        for i in d.get("produced", [])
    )
    if isinstance(definition, Bulk) and len(produced) > 1:
        raise ValueError(f"Bulk rule {d['name']!r} can hold at most one item")
    return Rule(
        name=d["name"],
        definition=definition,
        precondition=any_product() if pre is None else condition_from_json(pre),
        postcondition=any_product() if post is None else condition_from_json(post),
        active=active,
        produced=produced,
    )


# ---------------------------------------------------------------------------
# Top-level API
# ---------------------------------------------------------------------------


def dumps_rules(rules: Iterable[Rule], indent: int | None = 2) -> str:
    return json.dumps([rule_to_json(r) for r in rules], indent=indent, ensure_ascii=False)


def loads_rules(s: str) -> tuple[Rule, ...]:
    data = json.loads(s)
    if not isinstance(data, list):
        raise TypeError(f"Rules must be a JSON list, got {type(data).__name__}")
    return tuple(rule_from_json(d) for d in data)


def load_rules(path: str | Path) -> Result[tuple[Rule, ...], Exception]:
    """Load rule definitions from a JSON file."""
    try:
        text = Path(path).read_text()
    except OSError as e:
        logger.warning("Could not read rules file %s: %s", path, e)
        return Err(e)

    try:
        return Ok(loads_rules(text))
    except (KeyError, TypeError, ValueError) as e:
        logger.warning("Malformed rules file %s: %s", path, e)
        return Err(e)
