from sqlalchemy import Column, Integer, ForeignKey, String, DateTime, Text
from sqlalchemy.sql import func

from storefront.data.database import Base


class OrderStatusHistoryModel(Base):
    """Append-only log zmian statusu."""

    __tablename__ = "order_status_history"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(Integer, primary_key=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    status = Column(String(32), nullable=False)
    details = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
