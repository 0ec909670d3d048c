from sqlalchemy import Column, Integer, String

from loom.data.database import Base, UTCDateTime, utc_now


class CartItemModel(Base):
    __tablename__ = "cart_items"

    user_id = Column(String, primary_key=True)
    product_id = Column(String, primary_key=True)

    quantity = Column(Integer, nullable=False)
    # snapshots taken when the item was put in the cart
    price = Column(Integer, nullable=False)
    name = Column(String, nullable=False)
    image_url = Column(String, nullable=True)
    artisan_id = Column(String, nullable=False)
    added_at = Column(UTCDateTime, nullable=False, default=utc_now)
