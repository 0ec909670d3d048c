# loom/data/models/product.py
import uuid

from sqlalchemy import Boolean, CheckConstraint, Column, Integer, JSON, String, Text

from loom.data.database import Base, UTCDateTime, utc_now


class ProductModel(Base):
    __tablename__ = "products"
    __table_args__ = (CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"),)

    id = Column(String, primary_key=True, default=lambda: uuid.uuid4().hex)
    artisan_id = Column(String, nullable=False, index=True)
    artisan_name = Column(String, nullable=True)

    name = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    image_url = Column(String, nullable=True)
    category = Column(String, nullable=False, index=True)
    region = Column(String, nullable=True, index=True)
    materials = Column(JSON, nullable=False, default=list)

    # minor currency units (paise)
    price = Column(Integer, nullable=False)
    stock = Column(Integer, nullable=False, default=0)
    is_featured = Column(Boolean, nullable=False, default=False)
    created_at = Column(UTCDateTime, nullable=False, default=utc_now)

    # bumped by every transactional write, see loom.repos.transaction
    version = Column(Integer, nullable=False, default=1)
