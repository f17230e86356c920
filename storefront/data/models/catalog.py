# storefront/data/models/catalog.py
from sqlalchemy import Column, Integer, String, Text, Numeric

from storefront.data.database import Base


class CatalogModel(Base):
    """Model 3D z katalogu, ten serwis tylko go czyta."""

    __tablename__ = "3d_models"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    estimated_price = Column(Numeric(10, 2), nullable=True)
    preview_url = Column(String(500), nullable=True)
    thumbnail_url = Column(String(500), nullable=True)
