from pydantic import BaseModel
from typing import Optional, Tuple
from datetime import datetime

from app.constants.order_status import OrderStatus, PaymentMethod
from app.schemas.address_schemas import ShippingAddress


class OrderProduct(BaseModel):
    id: str
    name: str
    unit_price: float
    image: str = ""

    model_config = {"frozen": True}


class OrderLine(BaseModel):
    product: OrderProduct
    quantity: int
    color: Optional[str] = None
    completed: Optional[bool] = None

    model_config = {"frozen": True}


class OrderUser(BaseModel):
    id: int
    username: str
    email: str

    model_config = {"frozen": True}


class OrderDraft(BaseModel):
    """Snapshot of a checkout, built once and never mutated."""

    order_id: str
    user: OrderUser
    lines: Tuple[OrderLine, ...]
    shipping_address: ShippingAddress
    payment_method: PaymentMethod
    subtotal: float
    shipping: float
    total_amount: float
    status: OrderStatus = OrderStatus.pending
    created_at: datetime

    model_config = {"frozen": True}


class OrderRead(OrderDraft):
    id: str
    updated_at: Optional[datetime] = None


class OrderStatusUpdate(BaseModel):
    status: OrderStatus
