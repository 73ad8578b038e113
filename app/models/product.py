from sqlmodel import SQLModel, Field
from sqlalchemy import Column, JSON
from typing import List, Optional
from datetime import datetime
from uuid import uuid4


class Product(SQLModel, table=True):
    id: str = Field(default_factory=lambda: str(uuid4()), primary_key=True)
    name: str = Field(index=True)
    price: float
    image: str
    colors: List[str] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))

    category: Optional[str] = Field(default=None, index=True)  # tractors / harvesters / tillers ...
    description: Optional[str] = None
    stock: int = 0

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: Optional[datetime] = None
