from sqlalchemy import Column, Integer, String, Float, Text, DateTime, CheckConstraint, func
from catalog.db.database import Base
from catalog.db.identifiers import new_id

PRODUCT_CATEGORY_IDS = range(1, 8)


class Product(Base):
    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("product_category_id BETWEEN 1 AND 7", name="ck_products_category_id"),
    )

    id = Column(String(32), primary_key=True, default=new_id)
    product_name = Column(String(255), nullable=False)
    # Public storage URL; cleared when the image is removed
    product_image = Column(Text, nullable=True)
    old_price = Column(Float, nullable=False)
    offer_price = Column(Float, nullable=False)
    categories = Column(String(255), nullable=False)
    product_category_id = Column(Integer, nullable=False, index=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
