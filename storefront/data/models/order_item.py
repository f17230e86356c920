from sqlalchemy import Column, Integer, ForeignKey, Numeric

from storefront.data.database import Base


class OrderItemModel(Base):
    __tablename__ = "order_items"

    id = Column(Integer, primary_key=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    model_id = Column(Integer, ForeignKey("3d_models.id"), nullable=False)

    quantity = Column(Integer, nullable=False)
    # snapshot z chwili checkoutu, nie przeliczany z katalogu
    unit_price = Column(Numeric(10, 2), nullable=False)
    line_total = Column(Numeric(10, 2), nullable=False)
