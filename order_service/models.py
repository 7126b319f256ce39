import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Integer, Float, DateTime, JSON
from sqlalchemy.types import TypeDecorator

from order_service.database import Base


def new_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class UTCDateTime(TypeDecorator):
    """Stores every datetime in UTC and hands it back timezone-aware (SQLite keeps no offset)."""

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return as_utc(value)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return as_utc(value)

class Order(Base):
    __tablename__ = "orders"

    id = Column(String, primary_key=True, default=new_id)
    user_id = Column(String, index=True, nullable=False)
    cart_id = Column(String)
    cart_items = Column(JSON, nullable=False, default=list)     # [{productId, title, price, quantity}]
    address_info = Column(JSON)
    order_status = Column(String, nullable=False, default="pending")      # pending | confirmed
    payment_method = Column(String)
    payment_status = Column(String, nullable=False, default="pending")    # pending | paid
    total_amount = Column(Float, nullable=False)
    order_date = Column(UTCDateTime, nullable=False, default=utcnow)
    order_update_date = Column(UTCDateTime, nullable=False, default=utcnow)
    payment_id = Column(String)     # provider payment id
    payer_id = Column(String)       # provider payer id


class Cart(Base):
    __tablename__ = "carts"

    id = Column(String, primary_key=True, default=new_id)
    user_id = Column(String, index=True, nullable=False)
    items = Column(JSON, nullable=False, default=list)


class Product(Base):
    __tablename__ = "products"

    id = Column(String, primary_key=True, default=new_id)
    title = Column(String, nullable=False)
    price = Column(Float, nullable=False, default=0)
    total_stock = Column(Integer, nullable=False, default=0)
