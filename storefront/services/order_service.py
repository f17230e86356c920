# storefront/services/order_service.py
from datetime import datetime, timezone
from typing import Any, Dict, List

from sqlalchemy.ext.asyncio import AsyncSession

from storefront.data.models.order import OrderModel
from storefront.data.models.order_status_history import OrderStatusHistoryModel
from storefront.domain.errors import NotFoundError, ValidationError
from storefront.domain.timeline import ORDER_STATUS_STEPS, PAYMENT_CONFIRMED, build_timeline
from storefront.domain.values import clean_text, deserialize_shipping_address, require_positive_id, to_price
from storefront.repos.order_repo import OrderRepo
from storefront.services.access import Caller, ensure_admin, ensure_order_ownership, resolve_target_user
from storefront.services.notification_service import NotificationService
from storefront.services.transaction import atomic
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

PAYMENT_PAID = "paid"


def serialize_order_summary(order: OrderModel) -> Dict[str, Any]:
    return {
        "id": order.id,
        "status": order.status,
        "total_amount": to_price(order.total_amount),
        "payment_status": order.payment_status,
        "payment_method": order.payment_method,
        "shipping_address": deserialize_shipping_address(order.shipping_address),
        "created_at": order.created_at,
        "updated_at": order.updated_at,
    }


class OrderService:
    """
    Serwis odpowiedzialny za odczyt zamówień i zmiany statusu.
    Tworzenie zamowien jest w CheckoutService.
    """

    def __init__(self, db: AsyncSession, notification_service: NotificationService | None = None):
        self.db = db
        self.repo = OrderRepo(db)
        self.notification_service = notification_service or NotificationService()

    async def get_order(self, caller: Caller, order_id: Any) -> Dict[str, Any]:
        """
        Use Case: Pobranie zamówienia z pozycjami i timeline (Query).
        """
        order_id = require_positive_id(order_id, "orderId")

        async with atomic(self.db, "Failed to load order."):
            return await self._order_view(caller, order_id)

    async def _order_view(self, caller: Caller, order_id: int) -> Dict[str, Any]:
        order = await self.repo.get_order(order_id)

        if not order:
            raise NotFoundError("Order not found.")

        ensure_order_ownership(caller, order.user_id)

        item_rows = await self.repo.get_order_item_rows(order_id)
        history = await self.repo.get_status_history(order_id)

        serialized = serialize_order_summary(order)
        serialized.update(
            {
                "user_id": order.user_id,
                "notes": order.notes,
                "items": [
                    {
                        "order_item_id": row.id,
                        "model_id": row.model_id,
                        "name": row.name,
                        "preview_url": row.preview_url,
                        "quantity": row.quantity if row.quantity and row.quantity > 0 else 1,
                        "unit_price": to_price(row.unit_price),
                        "line_total": to_price(row.line_total),
                    }
                    for row in item_rows
                ],
            }
        )

        return {
            "order": serialized,
            "timeline": build_timeline(order.status, history),
        }

    async def list_orders(self, caller: Caller, user_id: Any = None) -> Dict[str, Any]:
        target_user_id = resolve_target_user(caller, user_id)

        async with atomic(self.db, "Failed to load orders."):
            orders = await self.repo.get_orders_for_user(target_user_id)
            summaries: List[Dict[str, Any]] = [serialize_order_summary(o) for o in orders]

        return {"user_id": target_user_id, "orders": summaries}

    async def append_status(self, caller: Caller, order_id: Any, status: str, details: Any = None) -> Dict[str, Any]:
        """
        Use Case: zmiana statusu zamowienia (admin).
        orders.status i wpis w historii zapisywane w jednej transakcji.
        """
        ensure_admin(caller)
        order_id = require_positive_id(order_id, "orderId")
        status = (status or "").strip().lower()

        if status not in ORDER_STATUS_STEPS:
            raise ValidationError(f"Unknown order status: {status or '(empty)'}.")

        async with atomic(self.db, "Failed to update order status."):
            order = await self.repo.get_order(order_id, lock=True)
            if not order:
                raise NotFoundError("Order not found.")

            history = await self.repo.get_status_history(order_id)
            if any(entry.status == status for entry in history):
                raise ValidationError(f"Order already has status {status}.")

            #status tylko do przodu, przeskoczenie etapu jest dozwolone
            if order.status in ORDER_STATUS_STEPS and (
                ORDER_STATUS_STEPS.index(status) < ORDER_STATUS_STEPS.index(order.status)
            ):
                raise ValidationError(f"Cannot move order from {order.status} back to {status}.")

            order.status = status
            order.updated_at = datetime.now(timezone.utc)
            if status == PAYMENT_CONFIRMED:
                order.payment_status = PAYMENT_PAID

            await self.repo.add_status_entry(
                OrderStatusHistoryModel(
                    order_id=order_id,
                    status=status,
                    details=clean_text(details),
                )
            )
            owner_id = order.user_id

        logger.info(f"Order {order_id} -> {status}")

        await self.notification_service.notify_order_status(owner_id, order_id, status)

        return await self.get_order(caller, order_id)
