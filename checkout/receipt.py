"""Receipt rendering for a cart, as text (Jinja2) or as a JSON-ready dict."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jinja2

from . import cart as cart_
from .cart import Cart
from .products import Amount, DiscountItem, Product, item_amount

TEMPLATE_DIR = Path(__file__).parent / "templates"

_env = jinja2.Environment(
    loader=jinja2.FileSystemLoader(TEMPLATE_DIR),
    autoescape=False,
    keep_trailing_newline=True,
    trim_blocks=True,
    lstrip_blocks=True,
)


@dataclass(frozen=True)
class ReceiptLine:
    label: str
    amount: Amount
    code: str | None = None
    """Product code, or None for discount lines."""


def format_amount(amount: Amount, currency: str = "£") -> str:
    """Render minor units, e.g. 311 -> ``£3.11`` and -100 -> ``-£1.00``."""
    sign = "-" if amount < 0 else ""
    major, minor = divmod(abs(amount), 100)
    return f"{sign}{currency}{major}.{minor:02d}"


def receipt_lines(cart: Cart) -> tuple[ReceiptLine, ...]:
    lines: list[ReceiptLine] = []
    for item in cart_.items(cart):
        match item:
            case Product(code=code, name=name):
                lines.append(ReceiptLine(label=name, amount=item_amount(item), code=code))
            case DiscountItem(name=name):
                lines.append(ReceiptLine(label=name, amount=item_amount(item)))
    return tuple(lines)


def render_receipt(cart: Cart, currency: str = "£") -> str:
    """Render the visible cart items and totals as a plain-text receipt."""
    return _env.get_template("receipt.txt.j2").render(
        lines=receipt_lines(cart),
        subtotal=cart.price,
        discounts=cart_.discount_total(cart),
        total=cart_.total(cart),
        money=lambda amount: format_amount(amount, currency),
    )


def receipt_json(cart: Cart) -> dict[str, Any]:
    """Machine-readable receipt for other presenters."""
    return {
        "items": [
            {"label": line.label, "code": line.code, "amount": line.amount}
            for line in receipt_lines(cart)
        ],
        "subtotal": cart.price,
        "discounts": cart_.discount_total(cart),
        "total": cart_.total(cart),
    }
