from pydantic import BaseModel
from typing import List

from app.constants.order_status import PaymentMethod
from app.models.cart import LineItem
from app.schemas.address_schemas import AddressForm


class CartTotals(BaseModel):
    subtotal: float       # sum of unit_price * quantity over selected lines
    shipping: float       # 0 above the free shipping threshold or on an empty selection
    total: float          # subtotal + shipping


class CheckoutSummary(BaseModel):
    items: List[LineItem]
    summary: CartTotals


class PlaceOrderRequest(BaseModel):
    shipping_address: AddressForm
    payment_method: PaymentMethod = PaymentMethod.cod
