from sqlmodel import SQLModel, Field
from sqlalchemy import Column, JSON
from typing import List, Optional
from datetime import datetime
from uuid import uuid4

from app.constants.order_status import OrderStatus


class Order(SQLModel, table=True):
    # server identifier; ``order_id`` is the human facing display label
    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    order_id: str = Field(index=True)

    user_id: int = Field(index=True)
    user: dict = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    lines: List[dict] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    shipping_address: dict = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))

    payment_method: str

    subtotal: float
    shipping: float
    total_amount: float

    status: str = Field(default=OrderStatus.pending.value, index=True)

    created_at: datetime = Field(default_factory=datetime.utcnow, index=True)
    updated_at: Optional[datetime] = None
