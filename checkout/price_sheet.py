"""Price sheets: where products come from.

The pricing core takes products as given. A price sheet is the lookup it is
fed from; unknown codes are reported here as `Err(KeyError)` values and
never reach a cart.

Price sheet files are JSON lists:

    [{"code": "GR1", "name": "Green tea", "price": 311}, ...]
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any

from .products import Product, ProductCode
from .result import Err, Ok, Result

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PriceSheet:
    """Read-only mapping from product code to product."""

    products: Mapping[ProductCode, Product]

    def __post_init__(self) -> None:
        object.__setattr__(self, "products", MappingProxyType(dict(self.products)))

    @classmethod
    def of(cls, *products: Product) -> PriceSheet:
        """Build a sheet from products; each code may appear only once."""
        by_code: dict[ProductCode, Product] = {}
        for p in products:
            if p.code in by_code:
                raise ValueError(f"Duplicate product code {p.code!r}")
            by_code[p.code] = p
        return cls(products=by_code)

    @property
    def codes(self) -> tuple[ProductCode, ...]:
        return tuple(self.products)

    def lookup(self, code: ProductCode) -> Result[Product, KeyError]:
        match self.products.get(code):
            case Product() as product:
                return Ok(product)
            case _:
                logger.warning("Unknown product code %r", code)
                return Err(KeyError(code))

    def lookup_all(
        self, codes: Iterable[ProductCode]
    ) -> Result[tuple[Product, ...], KeyError]:
        """Look up every code, stopping at the first unknown one."""
        found: list[Product] = []
        for code in codes:
            match self.lookup(code):
                case Ok(product):
                    found.append(product)
                case Err(e):
                    return Err(e)
        return Ok(tuple(found))


def product_from_json(d: dict[str, Any]) -> Product:
    code = d["code"]
    if not isinstance(code, str):
        raise TypeError(f"Product code must be a string, got {code!r}")
    price = d["price"]
    if isinstance(price, bool) or not isinstance(price, int):
        raise TypeError(f"Price of {code!r} must be an integer, got {price!r}")
    return Product(code=code, name=d.get("name", "<empty>"), price=price)


def product_to_json(p: Product) -> dict[str, Any]:
    return {"code": p.code, "name": p.name, "price": p.price}


def load_price_sheet(path: str | Path) -> Result[PriceSheet, Exception]:
    """Load a price sheet from a JSON file."""
    try:
        data = json.loads(Path(path).read_text())
    except (OSError, ValueError) as e:
        logger.warning("Could not read price sheet %s: %s", path, e)
        return Err(e)

    if not isinstance(data, list):
        return Err(ValueError(f"Price sheet must be a JSON list, got {type(data).__name__}"))

    try:
        return Ok(PriceSheet.of(*(product_from_json(d) for d in data)))
    except (KeyError, TypeError, ValueError) as e:
        logger.warning("Malformed price sheet %s: %s", path, e)
        return Err(e)
