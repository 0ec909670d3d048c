# loom/data/models/auction_piece.py
import uuid

from sqlalchemy import Column, Integer, JSON, String, Text

from loom.data.database import Base, UTCDateTime, utc_now

STATUS_PENDING_VALUATION = "pending_valuation"
STATUS_APPRAISED = "appraised"
STATUS_LIVE = "live"
STATUS_SOLD = "sold"
STATUS_UNSOLD = "unsold"

BIDDABLE_STATUSES = (STATUS_APPRAISED, STATUS_LIVE)
PUBLIC_STATUSES = (STATUS_APPRAISED, STATUS_LIVE, STATUS_SOLD, STATUS_UNSOLD)


class AuctionPieceModel(Base):
    __tablename__ = "auction_pieces"

    id = Column(String, primary_key=True, default=lambda: uuid.uuid4().hex)
    artisan_id = Column(String, nullable=False, index=True)
    artisan_name = Column(String, nullable=True)

    name = Column(String, nullable=False)
    description = Column(Text, nullable=False, default="")
    image_url = Column(String, nullable=True)
    category = Column(String, nullable=True)
    region = Column(String, nullable=True)
    materials = Column(JSON, nullable=False, default=list)
    dimensions = Column(String, nullable=True)
    year_created = Column(String, nullable=True)
    duration_hours = Column(Integer, nullable=True)

    status = Column(String, nullable=False, default=STATUS_PENDING_VALUATION, index=True)

    # reserve_price and end_time are set by appraisal; amounts in minor units
    reserve_price = Column(Integer, nullable=True)
    end_time = Column(UTCDateTime, nullable=True, index=True)
    current_highest_bid = Column(Integer, nullable=True)
    current_highest_bidder_id = Column(String, nullable=True)

    winning_bid_amount = Column(Integer, nullable=True)
    winning_bidder_id = Column(String, nullable=True)
    closed_at = Column(UTCDateTime, nullable=True)
    created_at = Column(UTCDateTime, nullable=False, default=utc_now)

    version = Column(Integer, nullable=False, default=1)
