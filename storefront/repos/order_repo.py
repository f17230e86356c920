# storefront/repos/order_repo.py
from typing import List, Sequence

from sqlalchemy import select, func
from sqlalchemy.engine import Row
from sqlalchemy.ext.asyncio import AsyncSession

from storefront.data.models.catalog import CatalogModel
from storefront.data.models.order import OrderModel
from storefront.data.models.order_item import OrderItemModel
from storefront.data.models.order_status_history import OrderStatusHistoryModel


class OrderRepo:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_order(self, order: OrderModel) -> OrderModel:
        #flush zeby dostac order.id, commit robi serwis
        self.db.add(order)
        await self.db.flush()
        return order

    async def add_order_items(self, items: List[OrderItemModel]):
        self.db.add_all(items)
        await self.db.flush()

    async def add_status_entry(self, entry: OrderStatusHistoryModel) -> OrderStatusHistoryModel:
        self.db.add(entry)
        await self.db.flush()
        return entry

    async def get_order(self, order_id: int, lock: bool = False) -> OrderModel | None:
        stmt = select(OrderModel).where(OrderModel.id == order_id)
        if lock:
            stmt = stmt.with_for_update()
        result = await self.db.execute(stmt)
        return result.scalar_one_or_none()

    async def get_order_item_rows(self, order_id: int) -> List[Row]:
        # ceny ze snapshotu order_items, z katalogu tylko nazwa i podglad
        result = await self.db.execute(
            select(
                OrderItemModel.id,
                OrderItemModel.model_id,
                OrderItemModel.quantity,
                OrderItemModel.unit_price,
                OrderItemModel.line_total,
                CatalogModel.name,
                func.coalesce(CatalogModel.preview_url, CatalogModel.thumbnail_url).label("preview_url"),
            )
            .outerjoin(CatalogModel, CatalogModel.id == OrderItemModel.model_id)
            .where(OrderItemModel.order_id == order_id)
            .order_by(OrderItemModel.id.asc())
        )
        return list(result.all())

    async def get_status_history(self, order_id: int) -> Sequence[OrderStatusHistoryModel]:
        result = await self.db.execute(
            select(OrderStatusHistoryModel)
            .where(OrderStatusHistoryModel.order_id == order_id)
            .order_by(OrderStatusHistoryModel.created_at.asc(), OrderStatusHistoryModel.id.asc())
        )
        return result.scalars().all()

    async def get_orders_for_user(self, user_id: int) -> Sequence[OrderModel]:
        result = await self.db.execute(
            select(OrderModel)
            .where(OrderModel.user_id == user_id)
            .order_by(OrderModel.created_at.desc(), OrderModel.id.desc())
        )
        return result.scalars().all()
