# storefront/services/access.py
from dataclasses import dataclass
from typing import Any

from storefront.domain.errors import ValidationError

ADMIN_ROLE = "admin"


@dataclass(frozen=True)
class Caller:
    """Tozsamosc z tokenu (id + rola)."""

    user_id: int
    role: str = "customer"

    @property
    def is_admin(self) -> bool:
        return (self.role or "").lower() == ADMIN_ROLE


def normalize_user_id(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    try:
        numeric = int(value)
    except (TypeError, ValueError):
        return None
    return numeric if numeric > 0 else None


def resolve_target_user(caller: Caller, provided_user_id: Any = None) -> int:
    """
    Ustala czyj koszyk/zamowienia dotyczy operacja.
    Inny user niz w tokenie -> tylko admin, w przeciwnym razie PermissionError.
    """
    token_user_id = normalize_user_id(caller.user_id)
    provided = normalize_user_id(provided_user_id)

    if token_user_id and provided and token_user_id != provided:
        if not caller.is_admin:
            raise PermissionError("You are not allowed to act on behalf of another user.")
        return provided

    target = token_user_id or provided
    if not target:
        raise ValidationError("A valid userId is required.")
    return target


def ensure_order_ownership(caller: Caller, order_user_id: int):
    if caller.user_id != order_user_id and not caller.is_admin:
        raise PermissionError("You are not allowed to view this order.")


def ensure_admin(caller: Caller):
    if not caller.is_admin:
        raise PermissionError("Admin access required.")
