# storefront/services/cart_service.py
from typing import Dict, Any

from sqlalchemy.ext.asyncio import AsyncSession

from storefront.domain.errors import NotFoundError
from storefront.domain.values import (
    CART_NOTES_MAX_LENGTH,
    ZERO,
    clean_text,
    line_total,
    require_positive_id,
    to_price,
)
from storefront.repos.cart_repo import CartRepo
from storefront.services.access import Caller, resolve_target_user
from storefront.services.transaction import atomic
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def build_cart_summary(user_id: int, rows) -> Dict[str, Any]:
    items = []
    item_count = 0
    total_quantity = 0
    subtotal = ZERO

    for row in rows:
        quantity = row.quantity if row.quantity and row.quantity > 0 else 1
        unit_price = to_price(row.unit_price)
        total = line_total(unit_price, quantity)

        items.append(
            {
                "cart_item_id": row.id,
                "model_id": row.model_id,
                "name": row.name,
                "description": row.description,
                "preview_url": row.preview_url,
                "quantity": quantity,
                "unit_price": unit_price,
                "line_total": total,
                "notes": row.notes,
            }
        )
        item_count += 1
        total_quantity += quantity
        subtotal = to_price(subtotal + total)

    return {
        "user_id": user_id,
        "items": items,
        "totals": {
            "item_count": item_count,
            "total_quantity": total_quantity,
            "subtotal": subtotal,
        },
    }


class CartService:
    """
    Koszyk uzytkownika, jedna pozycja na pare (user, model)
    commands (add, update, remove, clear) modyfikuja stan
    query (get) tylko odczyt
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.repo = CartRepo(db)

    #query - odczyt
    async def get_cart(self, caller: Caller, user_id: Any = None) -> Dict[str, Any]:
        target_user_id = resolve_target_user(caller, user_id)
        async with atomic(self.db, "Failed to load cart."):
            return await self._summary(target_user_id)

    async def _summary(self, user_id: int) -> Dict[str, Any]:
        rows = await self.repo.get_cart_rows(user_id)
        return build_cart_summary(user_id, rows)

    #commands
    async def add_item(
        self,
        caller: Caller,
        model_id: Any,
        quantity: int = 1,
        user_id: Any = None,
        notes: Any = None,
        unit_price: Any = None,
    ) -> Dict[str, Any]:
        target_user_id = resolve_target_user(caller, user_id)
        model_id = require_positive_id(model_id, "modelId")
        quantity = require_positive_id(quantity, "quantity")
        notes = clean_text(notes, CART_NOTES_MAX_LENGTH)

        async with atomic(self.db, "Failed to add item to cart."):
            model = await self.repo.get_catalog_model(model_id)
            if not model:
                raise NotFoundError("Model not found.")

            #cena z requestu ma pierwszenstwo, potem cena z katalogu, potem 0.00
            price = to_price(unit_price if unit_price is not None else model.estimated_price)

            # nowa pozycja albo inkrementacja istniejacej, po stronie bazy
            new_quantity = await self.repo.upsert_cart_item(
                user_id=target_user_id,
                model_id=model_id,
                quantity=quantity,
                unit_price=price,
                notes=notes,
            )
            logger.info(
                f"Model {model_id} w koszyku uzytkownika {target_user_id}: "
                f"+{quantity}, teraz {new_quantity}"
            )

            return await self._summary(target_user_id)

    async def update_item(
        self,
        caller: Caller,
        cart_item_id: Any,
        quantity: int,
        user_id: Any = None,
    ) -> Dict[str, Any]:
        target_user_id = resolve_target_user(caller, user_id)
        cart_item_id = require_positive_id(cart_item_id, "cartItemId")

        async with atomic(self.db, "Failed to update cart."):
            item = await self.repo.get_owned_item(cart_item_id, target_user_id)
            if not item:
                raise NotFoundError("Cart item not found.")

            if quantity <= 0:
                logger.info(f"Ilosc {quantity} dla pozycji {cart_item_id}, usuwam pozycje")
                await self.repo.delete_cart_item(item)
            else:
                item.quantity = quantity
                await self.repo.add_cart_item(item)

            return await self._summary(target_user_id)

    async def remove_item(self, caller: Caller, cart_item_id: Any, user_id: Any = None) -> Dict[str, Any]:
        target_user_id = resolve_target_user(caller, user_id)
        cart_item_id = require_positive_id(cart_item_id, "cartItemId")

        async with atomic(self.db, "Failed to remove item from cart."):
            item = await self.repo.get_owned_item(cart_item_id, target_user_id)
            if not item:
                raise NotFoundError("Cart item not found.")

            logger.info(f"Usuwanie pozycji {cart_item_id} z koszyka uzytkownika {target_user_id}")
            await self.repo.delete_cart_item(item)

            return await self._summary(target_user_id)

    async def clear_cart(self, caller: Caller, user_id: Any = None) -> int:
        target_user_id = resolve_target_user(caller, user_id)

        async with atomic(self.db, "Failed to clear cart."):
            removed = await self.repo.clear_user_cart(target_user_id)

        logger.info(f"Wyczyszczono koszyk uzytkownika {target_user_id} ({removed} pozycji)")
        return removed
