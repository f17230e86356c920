# storefront/domain/timeline.py
from datetime import datetime
from typing import Any, Dict, Iterable, List

ORDER_PLACED = "order_placed"
PAYMENT_CONFIRMED = "payment_confirmed"
SHIPPED = "shipped"
OUT_FOR_DELIVERY = "out_for_delivery"
DELIVERED = "delivered"

ORDER_STATUS_STEPS = (ORDER_PLACED, PAYMENT_CONFIRMED, SHIPPED, OUT_FOR_DELIVERY, DELIVERED)

STATUS_LABELS = {
    ORDER_PLACED: "Order Placed",
    PAYMENT_CONFIRMED: "Payment Confirmed",
    SHIPPED: "Shipped",
    OUT_FOR_DELIVERY: "Out for Delivery",
    DELIVERED: "Delivered",
}


def _get(entry: Any, key: str):
    if isinstance(entry, dict):
        return entry.get(key)
    return getattr(entry, key, None)


def _iso(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.isoformat()
    try:
        return datetime.fromisoformat(str(value)).isoformat()
    except ValueError:
        return None


def build_timeline(current_status: str | None, history: Iterable[Any]) -> List[Dict[str, Any]]:
    """
    Rzutuje historie statusow na 5 stalych krokow.

    Krok jest completed gdy ma wpis w historii ALBO gdy lezy na pozycji
    <= pozycji aktualnego statusu zamowienia (kroki bez wpisu sa uzupelniane).
    Nieznany status nie uzupelnia niczego. Dla powtorzonego statusu
    liczy sie pierwszy wpis.
    """
    first_by_status: Dict[str, Any] = {}
    for entry in history:
        status = _get(entry, "status")
        if status not in first_by_status:
            first_by_status[status] = entry

    current_index = (
        ORDER_STATUS_STEPS.index(current_status)
        if current_status in ORDER_STATUS_STEPS
        else -1
    )

    steps = []
    for index, status in enumerate(ORDER_STATUS_STEPS):
        entry = first_by_status.get(status)
        steps.append(
            {
                "status": status,
                "label": STATUS_LABELS[status],
                "timestamp": _iso(_get(entry, "created_at")) if entry is not None else None,
                "details": (_get(entry, "details") or None) if entry is not None else None,
                "completed": entry is not None or index <= current_index,
            }
        )
    return steps
