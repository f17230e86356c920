# storefront/domain/values.py
import json
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any

from storefront.domain.errors import ValidationError

CENT = Decimal("0.01")
ZERO = Decimal("0.00")

CART_NOTES_MAX_LENGTH = 255
PAYMENT_METHOD_MAX_LENGTH = 100


def to_price(value: Any) -> Decimal:
    """
    Zaokragla kwote do 2 miejsc (half-up).
    Brak wartosci, nie-liczba, NaN/inf albo wartosc ujemna -> 0.00, bez bledu.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    try:
        amount = Decimal(str(value).strip())
        if not amount.is_finite() or amount < 0:
            return ZERO
        return amount.quantize(CENT, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError, TypeError):
        return ZERO


def line_total(unit_price: Any, quantity: int) -> Decimal:
    return to_price(to_price(unit_price) * quantity)


def require_positive_id(value: Any, name: str) -> int:
    try:
        numeric = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"A valid {name} is required.")
    if isinstance(value, bool) or numeric <= 0:
        raise ValidationError(f"A valid {name} is required.")
    return numeric


def clean_text(value: Any, max_length: int | None = None) -> str | None:
    if not isinstance(value, str):
        return None
    text = value.strip()
    if max_length is not None:
        text = text[:max_length]
    return text or None


# shipping address

def serialize_shipping_address(value: Any) -> str | None:
    """dict -> JSON, niepusty tekst -> {"text": ...}, reszta -> None."""
    if isinstance(value, dict):
        if not value:
            return None
        return json.dumps(value, default=str)
    if isinstance(value, str) and value.strip():
        return json.dumps({"text": value.strip()})
    return None


def deserialize_shipping_address(value: Any) -> dict | None:
    if value is None or value == "":
        return None
    if isinstance(value, dict):
        return value
    try:
        parsed = json.loads(value)
    except (TypeError, ValueError):
        return {"text": str(value)}
    if not isinstance(parsed, dict):
        return {"text": str(value)}
    return parsed
