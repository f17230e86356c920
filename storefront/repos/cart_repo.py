# storefront/repos/cart_repo.py
from typing import List, Sequence

from sqlalchemy import select, delete, func
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.engine import Row
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.data.models.cart_item import CartItemModel
from storefront.data.models.catalog import CatalogModel


class CartRepo:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_catalog_model(self, model_id: int) -> CatalogModel | None:
        return await self.db.get(CatalogModel, model_id)

    async def upsert_cart_item(self, user_id: int, model_id: int, quantity: int, unit_price, notes) -> int:
        """
        INSERT ... ON CONFLICT (user_id, model_id) DO UPDATE w jednym zapytaniu,
        dwa rownolegle dodania tego samego modelu sumuja ilosc zamiast konfliktu.
        """
        dialect = self.db.bind.dialect.name
        if dialect == "postgresql":
            insert = postgresql.insert
        elif dialect == "sqlite":
            insert = sqlite.insert
        else:
            raise NotImplementedError(f"Cart upsert not supported for dialect {dialect}")

        stmt = insert(CartItemModel).values(
            user_id=user_id,
            model_id=model_id,
            quantity=quantity,
            unit_price=unit_price,
            notes=notes,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[CartItemModel.user_id, CartItemModel.model_id],
            set_={
                "quantity": CartItemModel.quantity + stmt.excluded.quantity,
                "unit_price": stmt.excluded.unit_price,
                "notes": stmt.excluded.notes,
                "updated_at": func.now(),
            },
        ).returning(CartItemModel.quantity)

        result = await self.db.execute(stmt)
        return result.scalar_one()

    async def get_owned_item(self, cart_item_id: int, user_id: int) -> CartItemModel | None:
        result = await self.db.execute(
            select(CartItemModel).where(
                CartItemModel.id == cart_item_id,
                CartItemModel.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    async def add_cart_item(self, item: CartItemModel) -> CartItemModel:
        self.db.add(item)
        await self.db.flush()
        return item

    async def delete_cart_item(self, item: CartItemModel):
        await self.db.delete(item)
        await self.db.flush()

    async def clear_user_cart(self, user_id: int) -> int:
        result = await self.db.execute(
            delete(CartItemModel).where(CartItemModel.user_id == user_id)
        )
        return result.rowcount

    async def delete_cart_items(self, cart_item_ids: List[int]) -> int:
        #tylko pozycje zablokowane przy checkoucie, linie dodane w miedzyczasie zostaja
        if not cart_item_ids:
            return 0
        result = await self.db.execute(
            delete(CartItemModel).where(CartItemModel.id.in_(cart_item_ids))
        )
        return result.rowcount

    async def lock_cart_items(self, user_id: int) -> Sequence[CartItemModel]:
        #SELECT ... FOR UPDATE, blokuje wiersze koszyka do konca transakcji
        result = await self.db.execute(
            select(CartItemModel)
            .where(CartItemModel.user_id == user_id)
            .order_by(CartItemModel.id)
            .with_for_update()
        )
        return result.scalars().all()

    async def get_cart_rows(self, user_id: int) -> List[Row]:
        """Pozycje koszyka z aktualnymi danymi z katalogu, najnowsze pierwsze."""
        result = await self.db.execute(
            select(
                CartItemModel.id,
                CartItemModel.model_id,
                CartItemModel.quantity,
                CartItemModel.unit_price,
                CartItemModel.notes,
                CatalogModel.name,
                CatalogModel.description,
                func.coalesce(CatalogModel.preview_url, CatalogModel.thumbnail_url).label("preview_url"),
            )
            .join(CatalogModel, CatalogModel.id == CartItemModel.model_id)
            .where(CartItemModel.user_id == user_id)
            .order_by(CartItemModel.updated_at.desc(), CartItemModel.id.desc())
        )
        return list(result.all())
