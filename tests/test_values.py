from decimal import Decimal

import pytest

from storefront.domain.errors import ValidationError
from storefront.domain.values import (
    clean_text,
    deserialize_shipping_address,
    line_total,
    require_positive_id,
    serialize_shipping_address,
    to_price,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (49.99, Decimal("49.99")),
        ("12.345", Decimal("12.35")),
        ("0.005", Decimal("0.01")),
        (Decimal("7"), Decimal("7.00")),
        (None, Decimal("0.00")),
        ("abc", Decimal("0.00")),
        ("", Decimal("0.00")),
        (-3, Decimal("0.00")),
        (float("nan"), Decimal("0.00")),
        ("Infinity", Decimal("0.00")),
        (True, Decimal("0.00")),
    ],
)
def test_to_price(value, expected):
    assert to_price(value) == expected


def test_line_total_rounds_to_cents():
    assert line_total("49.99", 2) == Decimal("99.98")
    assert line_total("0.333", 3) == Decimal("0.99")


def test_require_positive_id():
    assert require_positive_id("5", "modelId") == 5
    for bad in (0, -1, "x", None, True):
        with pytest.raises(ValidationError, match="modelId"):
            require_positive_id(bad, "modelId")


def test_clean_text():
    assert clean_text("  card  ") == "card"
    assert clean_text("   ") is None
    assert clean_text(42) is None
    assert clean_text("x" * 300, 255) == "x" * 255


def test_shipping_address_serialization():
    assert serialize_shipping_address(None) is None
    assert serialize_shipping_address("   ") is None
    assert serialize_shipping_address({}) is None
    assert serialize_shipping_address(" 1 Main St ") == '{"text": "1 Main St"}'
    assert serialize_shipping_address({"city": "Oslo"}) == '{"city": "Oslo"}'


def test_shipping_address_degrades_to_text():
    assert deserialize_shipping_address(None) is None
    assert deserialize_shipping_address('{"city": "Oslo"}') == {"city": "Oslo"}
    assert deserialize_shipping_address("not json") == {"text": "not json"}
    assert deserialize_shipping_address("[1, 2]") == {"text": "[1, 2]"}
