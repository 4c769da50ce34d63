from sqlalchemy import Column, String, Text, Numeric, DateTime, CheckConstraint

from storefront.data.database import Base
from storefront.data.models.base import new_id, utcnow


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=new_id)
    # produkty publiczne nie maja wlasciciela
    owner_id = Column(String(36), nullable=True, index=True)

    name = Column(String(255), nullable=False)
    image = Column(String(1024), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    title = Column(String(255), nullable=False)
    category = Column(String(100), nullable=False, index=True)
    description = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price_nonneg"),
    )
