import json

import pytest

from checkout import cart
from checkout.config import CheckoutSettings, open_cart
from checkout.discounts import percents
from checkout.price_sheet import product_to_json
from checkout.promotions import COFFEE, GREEN_TEA, STRAWBERRIES, reference_rules
from checkout.result import Err, Ok
from checkout.rules import new_rule
from checkout.serialization import dumps_rules

_ENV_VARS = (
    "CHECKOUT_PRICE_SHEET",
    "CHECKOUT_RULES",
    "CHECKOUT_CURRENCY",
    "CHECKOUT_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Isolate from the developer's environment and any .env file."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def prices_path(tmp_path):
    path = tmp_path / "prices.json"
    path.write_text(
        json.dumps([product_to_json(p) for p in (GREEN_TEA, STRAWBERRIES, COFFEE)])
    )
    return path


def test_price_sheet_required() -> None:
    match CheckoutSettings.from_env():
        case Err(ValueError() as e):
            assert "CHECKOUT_PRICE_SHEET" in str(e)
        case other:
            pytest.fail(f"Expected error, got {other!r}")


def test_from_env_defaults(monkeypatch) -> None:
    monkeypatch.setenv("CHECKOUT_PRICE_SHEET", " prices.json ")
    assert CheckoutSettings.from_env() == Ok(CheckoutSettings(price_sheet_path="prices.json"))


def test_from_env_reads_dotenv(tmp_path) -> None:
    (tmp_path / ".env").write_text(
        "CHECKOUT_PRICE_SHEET=prices.json\nCHECKOUT_CURRENCY=$\nCHECKOUT_LOG_LEVEL=debug\n"
    )
    match CheckoutSettings.from_env():
        case Ok(settings):
            assert settings.currency == "$"
            assert settings.log_level == "DEBUG"
        case Err(e):
            pytest.fail(f"Unexpected error: {e}")


def test_unknown_log_level(monkeypatch) -> None:
    monkeypatch.setenv("CHECKOUT_PRICE_SHEET", "prices.json")
    monkeypatch.setenv("CHECKOUT_LOG_LEVEL", "CHATTY")
    assert isinstance(CheckoutSettings.from_env(), Err)


def test_open_cart_with_reference_rules(prices_path) -> None:
    match open_cart(CheckoutSettings(price_sheet_path=str(prices_path))):
        case Ok((sheet, c)):
            assert sheet.lookup("CF1") == Ok(COFFEE)
            assert c == cart.empty(reference_rules())
        case Err(e):
            pytest.fail(f"Unexpected error: {e}")


def test_open_cart_with_rules_file(prices_path, tmp_path) -> None:
    rules_path = tmp_path / "rules.json"
    rules_path.write_text(dumps_rules([new_rule("half price", percents(-50))]))
    settings = CheckoutSettings(price_sheet_path=str(prices_path), rules_path=str(rules_path))
    match open_cart(settings):
        case Ok((_, c)):
            assert cart.total(cart.add(c, COFFEE)) == 562
        case Err(e):
            pytest.fail(f"Unexpected error: {e}")


def test_open_cart_reports_missing_files(prices_path, tmp_path) -> None:
    assert isinstance(open_cart(CheckoutSettings(price_sheet_path="missing.json")), Err)
    settings = CheckoutSettings(
        price_sheet_path=str(prices_path), rules_path=str(tmp_path / "missing.json")
    )
    assert isinstance(open_cart(settings), Err)


def test_configure_logging(monkeypatch) -> None:
    from checkout import config

    calls = []
    monkeypatch.setattr(config.logging, "basicConfig", lambda **kw: calls.append(kw))
    config.configure_logging(CheckoutSettings(price_sheet_path="p.json", log_level="DEBUG"))
    assert calls and calls[0]["level"] == "DEBUG"


def test_blank_currency_falls_back(monkeypatch) -> None:
    monkeypatch.setenv("CHECKOUT_PRICE_SHEET", "prices.json")
    monkeypatch.setenv("CHECKOUT_CURRENCY", "   ")
    match CheckoutSettings.from_env():
        case Ok(settings):
            assert settings.currency == "£"
        case Err(e):
            pytest.fail(f"Unexpected error: {e}")
