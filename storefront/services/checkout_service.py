# storefront/services/checkout_service.py
from decimal import Decimal
from typing import Any, Dict

from sqlalchemy.ext.asyncio import AsyncSession

from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.data.models.order_status_history import OrderStatusHistoryModel
from storefront.domain.errors import ValidationError
from storefront.domain.timeline import ORDER_PLACED
from storefront.domain.values import (
    PAYMENT_METHOD_MAX_LENGTH,
    clean_text,
    line_total,
    serialize_shipping_address,
    to_price,
)
from storefront.repos.cart_repo import CartRepo
from storefront.repos.order_repo import OrderRepo
from storefront.services.access import Caller, resolve_target_user
from storefront.services.notification_service import NotificationService
from storefront.services.transaction import atomic
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

PAYMENT_PENDING = "pending"


class CheckoutService:
    """
    Zamiana koszyka w zamowienie, wszystko albo nic.
    Koszyk czytany z FOR UPDATE, wiec drugi rownolegly checkout tego samego
    uzytkownika czeka na commit i widzi juz pusty koszyk.
    """

    def __init__(self, db: AsyncSession, notification_service: NotificationService | None = None):
        self.db = db
        self.cart_repo = CartRepo(db)
        self.order_repo = OrderRepo(db)
        self.notification_service = notification_service or NotificationService()

    async def checkout(
        self,
        caller: Caller,
        user_id: Any = None,
        shipping_address: Any = None,
        payment_method: Any = None,
        notes: Any = None,
    ) -> Dict[str, Any]:
        """
        Use Case: checkout.

        1. lock + odczyt pozycji koszyka
        2. pusty koszyk -> ValidationError
        3. sumy (line_total i total zaokraglone do 2 miejsc)
        4. order + order_items + wpis historii order_placed
        5. usuniecie zablokowanych pozycji koszyka i commit
        """
        target_user_id = resolve_target_user(caller, user_id)
        shipping_json = serialize_shipping_address(shipping_address)
        payment_method = clean_text(payment_method, PAYMENT_METHOD_MAX_LENGTH)
        notes = clean_text(notes)

        async with atomic(self.db, "Checkout failed."):
            cart_items = await self.cart_repo.lock_cart_items(target_user_id)

            if not cart_items:
                logger.warning(f"Checkout pustego koszyka uzytkownika {target_user_id}")
                raise ValidationError("Cart is empty.")

            lines = []
            raw_total = Decimal("0.00")
            for item in cart_items:
                quantity = item.quantity if item.quantity and item.quantity > 0 else 1
                unit_price = to_price(item.unit_price)
                raw_total += unit_price * quantity
                lines.append((item.model_id, quantity, unit_price, line_total(unit_price, quantity)))

            order = await self.order_repo.create_order(
                OrderModel(
                    user_id=target_user_id,
                    status=ORDER_PLACED,
                    total_amount=to_price(raw_total),
                    shipping_address=shipping_json,
                    payment_method=payment_method,
                    payment_status=PAYMENT_PENDING,
                    notes=notes,
                )
            )
            order_id = order.id

            await self.order_repo.add_order_items(
                [
                    OrderItemModel(
                        order_id=order_id,
                        model_id=model_id,
                        quantity=quantity,
                        unit_price=unit_price,
                        line_total=total,
                    )
                    for model_id, quantity, unit_price, total in lines
                ]
            )

            await self.order_repo.add_status_entry(
                OrderStatusHistoryModel(
                    order_id=order_id,
                    status=ORDER_PLACED,
                    details="Order created successfully.",
                )
            )

            # tylko zablokowane pozycje, to co doszlo w trakcie zostaje w koszyku
            await self.cart_repo.delete_cart_items([item.id for item in cart_items])

        logger.info(
            f"Order {order_id} created for user {target_user_id} "
            f"({len(lines)} pozycji, total {to_price(raw_total)})"
        )

        await self.notification_service.notify_order_status(target_user_id, order_id, ORDER_PLACED)

        return {"order_id": order_id, "status": ORDER_PLACED}
