"""Checkout settings from the environment (and a ``.env`` file).

    CHECKOUT_PRICE_SHEET   path to a JSON price sheet (required)
    CHECKOUT_RULES         path to a JSON rules file (default: reference promotions)
    CHECKOUT_CURRENCY      currency symbol for receipts (default: £)
    CHECKOUT_LOG_LEVEL     logging level name (default: WARNING)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import find_dotenv, load_dotenv

from . import cart as cart_
from .cart import Cart
from .price_sheet import PriceSheet, load_price_sheet
from .promotions import reference_rules
from .result import Err, Ok, Result
from .serialization import load_rules

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class CheckoutSettings:
    price_sheet_path: str
    rules_path: str | None = None
    currency: str = "£"
    log_level: str = "WARNING"

    @classmethod
    def from_env(cls) -> Result[CheckoutSettings, Exception]:
        """Creates settings from the environment, loading ``.env`` from the working directory first."""
        load_dotenv(find_dotenv(usecwd=True))

        match os.getenv("CHECKOUT_PRICE_SHEET"):
            case str(path) if path.strip():
                price_sheet_path = path.strip()
            case _:
                return Err(
                    ValueError("CHECKOUT_PRICE_SHEET not found or empty in environment.")
                )

        rules_path = (os.getenv("CHECKOUT_RULES") or "").strip() or None
        currency = (os.getenv("CHECKOUT_CURRENCY") or "").strip() or "£"
        log_level = (os.getenv("CHECKOUT_LOG_LEVEL") or "WARNING").strip().upper()
        if log_level not in _LOG_LEVELS:
            return Err(ValueError(f"Unknown CHECKOUT_LOG_LEVEL: {log_level}"))

        return Ok(
            cls(
                price_sheet_path=price_sheet_path,
                rules_path=rules_path,
                currency=currency,
                log_level=log_level,
            )
        )


def configure_logging(settings: CheckoutSettings) -> None:
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def open_cart(settings: CheckoutSettings) -> Result[tuple[PriceSheet, Cart], Exception]:
    """Load the configured price sheet and rules, and start an empty cart."""
    match load_price_sheet(settings.price_sheet_path):
        case Ok(sheet):
            pass
        case Err(e):
            return Err(e)

    if settings.rules_path is None:
        return Ok((sheet, cart_.empty(reference_rules())))

    match load_rules(settings.rules_path):
        case Ok(rules):
            return Ok((sheet, cart_.empty(rules)))
        case Err(e):
            return Err(e)
