from sqlalchemy import Column, ForeignKey, Integer, JSON, String
from sqlalchemy.orm import relationship

from loom.data.database import Base, UTCDateTime, utc_now

ORDER_STATUSES = ("Processing", "Shipped", "Delivered")


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(String, primary_key=True)
    user_id = Column(String, nullable=False, index=True)

    items = Column(JSON, nullable=False)
    items_by_artisan = Column(JSON, nullable=False)
    shipping_info = Column(JSON, nullable=False)
    total = Column(Integer, nullable=False)

    status = Column(String, nullable=False, default="Processing")  # Processing, Shipped, Delivered
    created_at = Column(UTCDateTime, nullable=False, default=utc_now)

    artisans = relationship(
        "OrderArtisanModel",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderArtisanModel.position",
        lazy="selectin",
    )

    @property
    def artisan_ids(self):
        return [a.artisan_id for a in self.artisans]


class OrderArtisanModel(Base):
    """One row per artisan whose items appear in an order."""

    __tablename__ = "order_artisans"

    order_id = Column(String, ForeignKey("orders.id", ondelete="CASCADE"), primary_key=True)
    artisan_id = Column(String, primary_key=True, index=True)
    position = Column(Integer, nullable=False, default=0)

    order = relationship("OrderModel", back_populates="artisans")
