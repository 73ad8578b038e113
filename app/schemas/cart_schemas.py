from pydantic import BaseModel, Field
from typing import List, Optional

from app.models.cart import LineItem
from app.schemas.checkout_schemas import CartTotals


class CartAddRequest(BaseModel):
    product_id: str
    quantity: int = Field(default=1, ge=1)
    color: Optional[str] = None


class CartUpdateRequest(BaseModel):
    quantity: int


class CartSelectAllRequest(BaseModel):
    selected: bool = True


class CartResponse(BaseModel):
    items: List[LineItem]
    total_items: int
    summary: CartTotals
