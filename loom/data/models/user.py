from sqlalchemy import Column, String

from loom.data.database import Base, UTCDateTime, utc_now

ROLE_CUSTOMER = "customer"
ROLE_ARTISAN = "artisan"


class UserModel(Base):
    __tablename__ = "users"

    # uid taken from the identity token
    id = Column(String, primary_key=True)
    display_name = Column(String, nullable=True)
    email = Column(String, nullable=True)
    role = Column(String, nullable=False, default=ROLE_CUSTOMER)
    created_at = Column(UTCDateTime, nullable=False, default=utc_now)
