from sqlmodel import SQLModel, Field
from typing import Optional


class LineItem(SQLModel):
    """One product entry in the cart. Identity is ``product_id``."""

    product_id: str
    name: str
    unit_price: float
    image: str = ""
    quantity: int = Field(default=1, ge=1)
    color: Optional[str] = None
    selected: bool = False

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity
