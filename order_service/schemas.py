"""
Request and response bodies of the order API.

Field names are snake_case in Python and camelCase on the wire.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CartItem(CamelModel):
    product_id: str
    title: str
    price: float = Field(..., ge=0, description="Unit price")
    quantity: int = Field(..., ge=1)
    image: Optional[str] = None


class AddressInfo(CamelModel):
    address_id: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    pincode: Optional[str] = None
    phone: Optional[str] = None
    notes: Optional[str] = None


class OrderCreate(CamelModel):
    user_id: str
    cart_id: Optional[str] = None
    cart_items: List[CartItem] = Field(default_factory=list)
    address_info: Optional[AddressInfo] = None
    order_status: str = "pending"
    payment_method: str = "card"
    payment_status: str = "pending"
    total_amount: float = Field(..., ge=0)
    order_date: Optional[datetime] = None
    order_update_date: Optional[datetime] = None
    payment_id: Optional[str] = None
    payer_id: Optional[str] = None


class CapturePaymentRequest(CamelModel):
    payment_id: str
    payer_id: str
    order_id: str


class OrderOut(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: str
    user_id: str
    cart_id: Optional[str] = None
    cart_items: List[CartItem]
    address_info: Optional[AddressInfo] = None
    order_status: str
    payment_method: Optional[str] = None
    payment_status: str
    total_amount: float
    order_date: datetime
    order_update_date: datetime
    payment_id: Optional[str] = None
    payer_id: Optional[str] = None


def serialize_order(order) -> dict:
    return OrderOut.model_validate(order).model_dump(by_alias=True, mode="json")
