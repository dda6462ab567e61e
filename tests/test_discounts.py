from fractions import Fraction

import pytest

from checkout.discounts import Bulk, Discount, absolute, bulk, compute, percents, share


def test_absolute_ignores_price() -> None:
    d = absolute(-100)
    assert compute(d, 0) == -100
    assert compute(d, 1123) == -100


def test_share_is_exact() -> None:
    d = share(-1, 3)
    assert d.amount == Fraction(-1, 3)
    assert compute(d, 3369) == -1123


def test_share_truncates_toward_zero() -> None:
    assert compute(share(-1, 3), 1123) == -374
    assert compute(share(1, 3), 1123) == 374
    assert compute(percents(-10), 311) == -31


def test_percents() -> None:
    assert percents(-100) == share(-100, 100)
    assert compute(percents(-100), 311) == -311


def test_bulk_starts_with_zero_total() -> None:
    assert bulk(share(-1, 3)) == Bulk(discount=Discount(Fraction(-1, 3)), running_total=0)


def test_share_rejects_non_positive_denominator() -> None:
    with pytest.raises(ValueError):
        share(1, 0)
    with pytest.raises(ValueError):
        share(1, -3)


def test_non_integer_amounts_rejected() -> None:
    with pytest.raises(TypeError):
        absolute(1.5)  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        share(1, 2.0)  # type: ignore[arg-type]
